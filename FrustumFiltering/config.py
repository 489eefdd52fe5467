"""
Configuration management for frustum filtering.

Holds the depth bounds, worker count, logging and export options in a single
dataclass, with JSON load/save helpers.
"""

import json
import os
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from .logger import get_logger


logger = get_logger("config")

# Sentinel for "derive the depth bounds from the structure, or use infinite frustums"
UNDEFINED_DEPTH = -1.0


@dataclass
class FrustumFilterConfig:
    """Configuration for the frustum filtering pipeline"""

    # Depth bounds (-1/-1 = computed from structure, or infinite without structure)
    z_near: float = UNDEFINED_DEPTH
    z_far: float = UNDEFINED_DEPTH

    # Pairwise scan
    num_workers: Optional[int] = None  # None = ThreadPoolExecutor default

    # Output
    export_ply: Optional[str] = None
    export_pairs: Optional[str] = None

    # Logging
    verbose: bool = False
    log_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'FrustumFilterConfig':
        """
        Create configuration from a dictionary

        Raises:
            ValueError: If the dictionary contains unknown keys
        """
        known = {f.name for f in fields(FrustumFilterConfig)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return FrustumFilterConfig(**data)


def save_config(config: FrustumFilterConfig, filepath: str) -> None:
    """
    Save configuration to JSON file

    Args:
        config: Configuration to save
        filepath: Output path
    """
    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info(f"Configuration saved to: {filepath}")


def load_config(filepath: str) -> FrustumFilterConfig:
    """
    Load configuration from JSON file

    Args:
        filepath: Path to configuration file

    Returns:
        Loaded configuration

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
        ValueError: If the file contains unknown keys
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    logger.info(f"Configuration loaded from: {filepath}")
    return FrustumFilterConfig.from_dict(data)

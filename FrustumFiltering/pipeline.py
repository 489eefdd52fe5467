"""
Frustum Filtering Pipeline
==========================

Prune the view pairs of a reconstructed scene to those whose camera frustums
overlap. Used before expensive per-pair work (feature matching, dense MVS) to
avoid processing every one of the O(V^2) pairs.
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .algorithms import (
    DepthRangeEstimator,
    FrustumBuilder,
    PairwiseOverlapScanner,
    PairSet,
    ProgressCallback
)
from .config import FrustumFilterConfig
from .core.structures import SfMScene
from .geometry import Frustum
from .io import FrustumMeshExporter, write_pairs
from .logger import get_logger


class FrustumFilter:
    """
    Frustum-based view pair filter.

    Near/far intervals and frustums are computed once at construction;
    pairs are computed on request.

    Args:
        scene: Reconstructed scene (read only)
        z_near: Near plane depth; -1 together with z_far = -1 derives the
            bounds from the scene structure, or uses infinite frustums when
            the scene has none. Defaults to the config value.
        z_far: Far plane depth, see z_near
        config: Configuration object. If None, uses defaults.
        progress_callback: Optional callable(done, total) for the pairwise scan

    Example:
        >>> frustum_filter = FrustumFilter(scene)
        >>> pairs = frustum_filter.get_frustum_intersection_pairs()
        >>> frustum_filter.export_ply("frustums.ply")
    """

    def __init__(self, scene: SfMScene, z_near: Optional[float] = None,
                 z_far: Optional[float] = None, config: Optional[FrustumFilterConfig] = None,
                 progress_callback: Optional[ProgressCallback] = None):
        self.config = config or FrustumFilterConfig()
        self.logger = get_logger("pipeline")
        self.progress_callback = progress_callback

        self.z_near = self.config.z_near if z_near is None else z_near
        self.z_far = self.config.z_far if z_far is None else z_far

        estimator = DepthRangeEstimator(self.z_near, self.z_far)
        self.z_near_z_far_per_view: Dict[int, Tuple[float, float]] = estimator.estimate(scene)
        self.is_truncated = estimator.is_truncated(scene)
        self.frustum_per_view: Dict[int, Frustum] = FrustumBuilder(self.is_truncated).build(
            scene, self.z_near_z_far_per_view)

        self.stats = {
            'num_views': len(scene.views),
            'num_depth_ranges': len(self.z_near_z_far_per_view),
            'num_frustums': len(self.frustum_per_view),
            'truncated': self.is_truncated
        }

    def get_frustum_intersection_pairs(self) -> PairSet:
        """
        All pairs (i, j), i < j, of views whose frustums intersect.
        """
        scanner = PairwiseOverlapScanner(
            num_workers=self.config.num_workers,
            progress_callback=self.progress_callback
        )
        pairs = scanner.scan(self.frustum_per_view)
        self.stats.update({
            'num_tests': scanner.stats['num_tests'],
            'num_pairs': scanner.stats['num_pairs'],
            'scan_time': scanner.stats['processing_time']
        })
        return pairs

    def export_ply(self, filename: Union[str, Path]) -> bool:
        """Export the frustums as a PLY mesh; False if the file could not be written"""
        return FrustumMeshExporter().export(self.frustum_per_view, filename)

    def export_pairs(self, pairs: PairSet, filename: Union[str, Path]) -> bool:
        return write_pairs(pairs, filename)

    def summary(self) -> str:
        lines = [
            "=" * 70,
            "FRUSTUM FILTER SUMMARY",
            "=" * 70,
            f"Views: {self.stats['num_views']}",
            f"Views with depth range: {self.stats['num_depth_ranges']}",
            f"Frustums: {self.stats['num_frustums']} "
            f"({'truncated' if self.is_truncated else 'infinite'})",
        ]
        if 'num_pairs' in self.stats:
            lines.append(f"Overlapping pairs: {self.stats['num_pairs']} / {self.stats['num_tests']}")
        lines.append("=" * 70)
        return "\n".join(lines)

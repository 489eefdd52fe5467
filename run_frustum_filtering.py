"""
Frustum Filtering - Command Line Entry Point
============================================

Compute the view pairs of a reconstructed scene whose camera frustums overlap.

Usage:
    python run_frustum_filtering.py --scene ./sparse/0 --output-pairs ./pairs.txt
    python run_frustum_filtering.py --scene ./scene.pkl --z-near 0.5 --z-far 20 --export-ply ./frustums.ply
    python run_frustum_filtering.py --scene ./sparse/0 --plot ./frustums.png
"""

import argparse
import sys
from pathlib import Path

from FrustumFiltering import FrustumFilter, FrustumFilterConfig, load_config, save_frustum_plot
from FrustumFiltering.core.structures import SfMScene
from FrustumFiltering.io import read_colmap_model
from FrustumFiltering.logger import configure_root_logger, get_logger


def load_scene(scene_path: Path) -> SfMScene:
    """
    Load a scene from a COLMAP text model directory or a pickled SfMScene.

    Raises:
        FileNotFoundError: If the path doesn't exist
    """
    if not scene_path.exists():
        raise FileNotFoundError(f"Scene not found: {scene_path}")
    if scene_path.is_dir():
        return read_colmap_model(scene_path)
    return SfMScene.load(str(scene_path))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Frustum-based view pair filtering")

    # Input/Output
    parser.add_argument('--scene', type=str, required=True,
                        help='COLMAP text model directory or pickled scene file')
    parser.add_argument('--output-pairs', type=str, default=None,
                        help='Write overlapping pairs to this text file')
    parser.add_argument('--export-ply', type=str, default=None,
                        help='Export frustums as a PLY mesh')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a 3D plot of the frustums and overlap links (PNG)')
    parser.add_argument('--config', type=str, default=None,
                        help='JSON configuration file')

    # Depth bounds
    parser.add_argument('--z-near', type=float, default=None,
                        help='Near plane depth (-1 with --z-far -1: derive from structure)')
    parser.add_argument('--z-far', type=float, default=None,
                        help='Far plane depth (-1 with --z-near -1: derive from structure)')

    # Execution
    parser.add_argument('--workers', type=int, default=None,
                        help='Number of threads for the pairwise scan')

    # Logging
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Log to file')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config) if args.config else FrustumFilterConfig()
    if args.z_near is not None:
        config.z_near = args.z_near
    if args.z_far is not None:
        config.z_far = args.z_far
    if args.workers is not None:
        config.num_workers = args.workers
    if args.output_pairs:
        config.export_pairs = args.output_pairs
    if args.export_ply:
        config.export_ply = args.export_ply
    if args.verbose:
        config.verbose = True
    if args.log_file:
        config.log_file = args.log_file

    configure_root_logger(level='DEBUG' if config.verbose else 'INFO', log_file=config.log_file)
    logger = get_logger("cli")

    scene = load_scene(Path(args.scene))
    logger.info("\n" + scene.summary())

    frustum_filter = FrustumFilter(scene, config=config)
    pairs = frustum_filter.get_frustum_intersection_pairs()
    logger.info("\n" + frustum_filter.summary())

    success = True
    if config.export_pairs:
        success &= frustum_filter.export_pairs(pairs, config.export_pairs)
    if config.export_ply:
        success &= frustum_filter.export_ply(config.export_ply)
    if args.plot:
        plot_path = save_frustum_plot(frustum_filter.frustum_per_view, args.plot, pairs)
        logger.info(f"Frustum plot saved to {plot_path}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())

"""
Frustum Filtering
=================

Camera-frustum based pre-filter for view pairs of a reconstructed scene.

Architecture:
    core/        - Scene data structures (views, intrinsics, poses, landmarks)
    geometry/    - Half-planes and camera frustums
    algorithms/  - Depth ranges, frustum construction, pairwise overlap scan
    io/          - COLMAP reader, pair lists, PLY export
    visualization.py - Matplotlib frustum plots

Example:
    >>> from FrustumFiltering import FrustumFilter
    >>> from FrustumFiltering.io import read_colmap_model
    >>>
    >>> scene = read_colmap_model('./sparse/0')
    >>> frustum_filter = FrustumFilter(scene, z_near=-1, z_far=-1)
    >>> pairs = frustum_filter.get_frustum_intersection_pairs()
    >>> frustum_filter.export_ply('./frustums.ply')
"""

from .config import FrustumFilterConfig, load_config, save_config
from .pipeline import FrustumFilter
from .visualization import plot_frustums, save_frustum_plot

__version__ = "1.0.0"
__all__ = [
    'FrustumFilter',
    'FrustumFilterConfig',
    'load_config',
    'save_config',
    'plot_frustums',
    'save_frustum_plot',
]

"""
Algorithms Module

The three stages of frustum filtering:
- DepthRangeEstimator: per-view (near, far) depth interval
- FrustumBuilder: one frustum per eligible view
- PairwiseOverlapScanner: exhaustive pairwise intersection test

Usage:
    from FrustumFiltering.algorithms import (
        DepthRangeEstimator, FrustumBuilder, PairwiseOverlapScanner
    )

    estimator = DepthRangeEstimator(z_near=-1, z_far=-1)
    depth_ranges = estimator.estimate(scene)
    frustums = FrustumBuilder(estimator.is_truncated(scene)).build(scene, depth_ranges)
    pairs = PairwiseOverlapScanner(num_workers=4).scan(frustums)
"""

from .depth_range import DepthRangeEstimator, DepthRanges
from .frustum_builder import FrustumBuilder
from .overlap_scanner import PairwiseOverlapScanner, PairSet, ProgressCallback

__all__ = [
    'DepthRangeEstimator',
    'FrustumBuilder',
    'PairwiseOverlapScanner',
    'DepthRanges',
    'PairSet',
    'ProgressCallback',
]

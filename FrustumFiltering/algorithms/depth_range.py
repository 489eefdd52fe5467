"""
Per-view near/far depth estimation.

Either broadcasts a fixed (z_near, z_far) pair to every valid view, or, when both
are left at -1 and the scene has structure, derives the interval of each view from
the depths of the landmarks it observes.
"""

from typing import Dict, Tuple

from ..config import UNDEFINED_DEPTH
from ..core.structures import SfMScene
from ..logger import get_logger


DepthRanges = Dict[int, Tuple[float, float]]


class DepthRangeEstimator:
    """
    Compute the (near, far) depth interval of each view.

    Args:
        z_near: Fixed near depth, or -1
        z_far: Fixed far depth, or -1
    """

    def __init__(self, z_near: float = UNDEFINED_DEPTH, z_far: float = UNDEFINED_DEPTH):
        self.z_near = z_near
        self.z_far = z_far
        self.logger = get_logger("depth_range")

    @property
    def bounds_undefined(self) -> bool:
        return self.z_near == UNDEFINED_DEPTH and self.z_far == UNDEFINED_DEPTH

    def uses_structure(self, scene: SfMScene) -> bool:
        """True when the intervals are computed from the scene landmarks"""
        return self.bounds_undefined and scene.has_structure

    def is_truncated(self, scene: SfMScene) -> bool:
        """
        Whether frustums should be truncated by near/far planes.

        Infinite frustums are only used when no bounds were given and there is
        no structure to compute them from.
        """
        return not self.bounds_undefined or self.uses_structure(scene)

    def estimate(self, scene: SfMScene) -> DepthRanges:
        """
        Compute the depth interval of every view that can receive one.

        Args:
            scene: Scene with views, poses, intrinsics and optional landmarks

        Returns:
            Mapping view id -> (near, far)
        """
        if self.uses_structure(scene):
            depth_ranges = self._from_structure(scene)
            self.logger.info(
                f"Computed near/far planes from {len(scene.landmarks)} landmarks "
                f"for {len(depth_ranges)} views")
        else:
            depth_ranges = self._fixed(scene)
            self.logger.info(
                f"Using fixed near/far planes ({self.z_near}, {self.z_far}) "
                f"for {len(depth_ranges)} views")
        return depth_ranges

    def _fixed(self, scene: SfMScene) -> DepthRanges:
        depth_ranges: DepthRanges = {}
        for view_id in sorted(scene.views):
            view = scene.views[view_id]
            if not scene.is_pose_and_intrinsic_defined(view):
                continue
            depth_ranges[view_id] = (self.z_near, self.z_far)
        return depth_ranges

    def _from_structure(self, scene: SfMScene) -> DepthRanges:
        depth_ranges: DepthRanges = {}
        for landmark in scene.landmarks.values():
            for view_id in landmark.observations:
                view = scene.views.get(view_id)
                if view is None or not scene.is_pose_and_intrinsic_defined(view):
                    continue

                z = scene.get_pose(view).depth(landmark.X)
                if view_id not in depth_ranges:
                    depth_ranges[view_id] = (z, z)
                    continue

                near, far = depth_ranges[view_id]
                if z < near:
                    depth_ranges[view_id] = (z, far)
                elif z > far:
                    depth_ranges[view_id] = (near, z)

        skipped = len(scene.valid_views()) - len(depth_ranges)
        if skipped > 0:
            self.logger.debug(f"{skipped} valid views observe no landmark and get no depth range")
        return dict(sorted(depth_ranges.items()))

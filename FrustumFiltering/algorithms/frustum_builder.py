"""
Frustum construction for every view that received a depth interval.
"""

from typing import Dict

from ..core.structures import SfMScene
from ..geometry import Frustum
from ..logger import get_logger
from .depth_range import DepthRanges


class FrustumBuilder:
    """
    Build one frustum per eligible view.

    A view is skipped (not an error) when its pose or intrinsics do not resolve,
    or when its camera model is not pinhole-class.

    Args:
        truncated: Build truncated frustums from each view's (near, far);
            otherwise build infinite frustums
    """

    def __init__(self, truncated: bool):
        self.truncated = truncated
        self.logger = get_logger("frustum_builder")

    def build(self, scene: SfMScene, depth_ranges: DepthRanges) -> Dict[int, Frustum]:
        frustums: Dict[int, Frustum] = {}

        for view_id in sorted(depth_ranges):
            view = scene.views.get(view_id)
            if view is None or not scene.is_pose_and_intrinsic_defined(view):
                self.logger.debug(f"View {view_id}: pose or intrinsics undefined, skipped")
                continue

            intrinsics = scene.get_intrinsics(view)
            camera = intrinsics.as_pinhole()
            if camera is None:
                self.logger.debug(
                    f"View {view_id}: unsupported camera model {intrinsics.type.name}, skipped")
                continue

            pose = scene.get_pose(view)
            if self.truncated:
                z_near, z_far = depth_ranges[view_id]
                frustums[view_id] = Frustum(
                    camera.width, camera.height, camera.K,
                    pose.rotation, pose.center, z_near, z_far)
            else:
                frustums[view_id] = Frustum(
                    camera.width, camera.height, camera.K,
                    pose.rotation, pose.center)

        kind = "truncated" if self.truncated else "infinite"
        self.logger.info(f"Built {len(frustums)} {kind} frustums "
                         f"({len(depth_ranges) - len(frustums)} views skipped)")
        return frustums

"""
Shared fixtures: small synthetic scenes with cameras looking along +Z.
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

project_root = Path(__file__).parent.parent  # Go up from tests/ to project root
sys.path.insert(0, str(project_root))

from FrustumFiltering.core.structures import (  # noqa: E402
    GenericIntrinsics,
    IntrinsicType,
    PinholeIntrinsics,
    Pose,
    SfMScene
)


# 100x100 image, focal 100 -> corner rays at (+-0.5, +-0.5, 1)
IMAGE_SIZE = 100
FOCAL = 100.0

LOOK_FORWARD = np.eye(3)                    # viewing direction +Z
LOOK_BACKWARD = np.diag([1.0, -1.0, -1.0])  # viewing direction -Z


@pytest.fixture
def pinhole():
    return PinholeIntrinsics.from_focal(IMAGE_SIZE, IMAGE_SIZE, FOCAL)


@pytest.fixture
def make_scene():
    """
    Factory: make_scene(centers, rotations=None) -> SfMScene

    One pinhole intrinsics (id 0) shared by all views; view i sits at centers[i].
    """
    def _make(centers, rotations=None):
        scene = SfMScene()
        scene.add_intrinsics(0, PinholeIntrinsics.from_focal(IMAGE_SIZE, IMAGE_SIZE, FOCAL))
        for view_id, center in enumerate(centers):
            R = LOOK_FORWARD if rotations is None else rotations[view_id]
            scene.add_view(view_id, 0, pose=Pose(rotation=R, center=np.asarray(center, dtype=float)))
        return scene
    return _make


@pytest.fixture
def row_scene(make_scene):
    """Five forward-looking cameras along X at x = 0, 1, 2, 10, 20"""
    return make_scene([[0, 0, 0], [1, 0, 0], [2, 0, 0], [10, 0, 0], [20, 0, 0]])


@pytest.fixture
def mixed_scene(make_scene):
    """
    Views 0-2 valid; view 3 has no pose, view 4 an unknown intrinsics id,
    view 5 a non-pinhole camera.
    """
    scene = make_scene([[0, 0, 0], [1, 0, 0], [2, 0, 0]])
    scene.add_view(3, 0)
    scene.add_view(4, 42, pose=Pose(rotation=LOOK_FORWARD, center=np.array([0.5, 0, 0])))
    scene.add_intrinsics(7, GenericIntrinsics(width=IMAGE_SIZE, height=IMAGE_SIZE,
                                              type=IntrinsicType.EQUIDISTANT_CAMERA,
                                              params=[80.0, 50.0, 50.0]))
    scene.add_view(5, 7, pose=Pose(rotation=LOOK_FORWARD, center=np.array([1.5, 0, 0])))
    return scene

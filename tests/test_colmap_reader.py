"""
Tests for reading COLMAP text models.
"""

import numpy as np
import pytest

from FrustumFiltering import FrustumFilter
from FrustumFiltering.core.structures import GenericIntrinsics, IntrinsicType
from FrustumFiltering.io import parse_camera_line, read_colmap_model


CAMERAS_TXT = """# Camera list with one line of data per camera:
#   CAMERA_ID, MODEL, WIDTH, HEIGHT, PARAMS[]
1 PINHOLE 100 100 100 100 50 50
2 SIMPLE_RADIAL 100 100 100 50 50 0.01
3 SIMPLE_RADIAL_FISHEYE 100 100 80 50 50 0.1
"""

IMAGES_TXT = """# Image list with two lines of data per image:
#   IMAGE_ID, QW, QX, QY, QZ, TX, TY, TZ, CAMERA_ID, NAME
#   POINTS2D[] as (X, Y, POINT3D_ID)
1 1 0 0 0 0 0 0 1 img_001.jpg
50 50 1 10 10 -1
2 1 0 0 0 -1 0 0 2 img_002.jpg
40 50 1
3 1 0 0 0 -2 0 0 3 img_003.jpg

"""

POINTS3D_TXT = """# 3D point list with one line of data per point:
#   POINT3D_ID, X, Y, Z, R, G, B, ERROR, TRACK[] as (IMAGE_ID, POINT2D_IDX)
1 0 0 5 255 0 0 0.5 1 0 2 0
"""


@pytest.fixture
def colmap_dir(tmp_path):
    (tmp_path / "cameras.txt").write_text(CAMERAS_TXT)
    (tmp_path / "images.txt").write_text(IMAGES_TXT)
    (tmp_path / "points3D.txt").write_text(POINTS3D_TXT)
    return tmp_path


def test_parse_camera_models():
    _, cam = parse_camera_line("1 SIMPLE_PINHOLE 640 480 500 320 240")
    assert cam.type == IntrinsicType.PINHOLE_CAMERA
    np.testing.assert_allclose(cam.K, [[500, 0, 320], [0, 500, 240], [0, 0, 1]])

    _, cam = parse_camera_line("2 OPENCV 640 480 500 510 320 240 0.1 0.01 0 0")
    assert cam.type == IntrinsicType.PINHOLE_CAMERA_BROWN
    assert cam.K[1, 1] == 510
    assert cam.distortion == [0.1, 0.01, 0.0, 0.0]

    _, cam = parse_camera_line("3 THIN_PRISM_FISHEYE 640 480 1 2 3 4 5 6 7 8 9 10 11 12")
    assert isinstance(cam, GenericIntrinsics)
    assert not cam.type.is_pinhole


def test_parse_camera_wrong_param_count():
    with pytest.raises(ValueError):
        parse_camera_line("1 PINHOLE 640 480 500 500 320")


def test_read_model(colmap_dir):
    scene = read_colmap_model(colmap_dir)

    assert sorted(scene.intrinsics) == [1, 2, 3]
    assert sorted(scene.views) == [1, 2, 3]
    assert scene.views[2].image_path == "img_002.jpg"
    np.testing.assert_allclose(scene.poses[2].center, [1.0, 0.0, 0.0])
    np.testing.assert_allclose(scene.poses[1].rotation, np.eye(3))

    landmark = scene.landmarks[1]
    np.testing.assert_allclose(landmark.X, [0, 0, 5])
    assert sorted(landmark.observations) == [1, 2]
    np.testing.assert_allclose(landmark.observations[1].x, [50, 50])
    np.testing.assert_allclose(landmark.observations[2].x, [40, 50])


def test_filter_on_colmap_model(colmap_dir):
    frustum_filter = FrustumFilter(read_colmap_model(colmap_dir))
    assert frustum_filter.z_near_z_far_per_view == {1: (5.0, 5.0), 2: (5.0, 5.0)}
    assert frustum_filter.get_frustum_intersection_pairs() == {(1, 2)}


def test_missing_points_file(colmap_dir):
    (colmap_dir / "points3D.txt").unlink()
    scene = read_colmap_model(colmap_dir)
    assert not scene.has_structure
    # fisheye view 3 has no pinhole frustum
    assert sorted(FrustumFilter(scene).frustum_per_view) == [1, 2]


def test_missing_required_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_colmap_model(tmp_path)

"""
Tests for frustum construction.
"""

from FrustumFiltering.algorithms import DepthRangeEstimator, FrustumBuilder


def build(scene, z_near=-1, z_far=-1):
    estimator = DepthRangeEstimator(z_near, z_far)
    ranges = estimator.estimate(scene)
    return FrustumBuilder(estimator.is_truncated(scene)).build(scene, ranges)


def test_infinite_frustums_without_structure(row_scene):
    frustums = build(row_scene)
    assert sorted(frustums) == [0, 1, 2, 3, 4]
    for f in frustums.values():
        assert f.is_infinite
        assert f.num_vertices == 5
        assert f.num_faces == 5


def test_truncated_frustums_with_explicit_bounds(row_scene):
    frustums = build(row_scene, 0.5, 8.0)
    for f in frustums.values():
        assert f.is_truncated
        assert f.num_vertices == 8
        assert f.num_faces == 6
        assert (f.z_near, f.z_far) == (0.5, 8.0)


def test_ineligible_views_are_skipped(mixed_scene):
    frustums = build(mixed_scene, 0.5, 8.0)
    assert sorted(frustums) == [0, 1, 2]


def test_views_missing_from_depth_ranges_are_skipped(row_scene):
    ranges = {1: (1.0, 2.0), 3: (0.5, 4.0)}
    frustums = FrustumBuilder(truncated=True).build(row_scene, ranges)
    assert sorted(frustums) == [1, 3]
    assert (frustums[3].z_near, frustums[3].z_far) == (0.5, 4.0)


def test_unknown_view_in_depth_ranges_is_skipped(row_scene):
    frustums = FrustumBuilder(truncated=False).build(row_scene, {0: (-1, -1), 77: (-1, -1)})
    assert sorted(frustums) == [0]

"""
End-to-end tests of the FrustumFilter facade.
"""

import numpy as np

from FrustumFiltering import FrustumFilter, FrustumFilterConfig
from FrustumFiltering.io import read_pairs


def test_infinite_mode_without_structure(row_scene):
    frustum_filter = FrustumFilter(row_scene)
    assert not frustum_filter.is_truncated
    assert all(f.is_infinite for f in frustum_filter.frustum_per_view.values())
    assert len(frustum_filter.get_frustum_intersection_pairs()) == 10


def test_explicit_bounds(row_scene):
    frustum_filter = FrustumFilter(row_scene, z_near=0.5, z_far=5.0)
    assert frustum_filter.is_truncated
    assert set(frustum_filter.z_near_z_far_per_view.values()) == {(0.5, 5.0)}
    assert frustum_filter.get_frustum_intersection_pairs() == {(0, 1), (0, 2), (1, 2)}


def test_bounds_from_structure(row_scene):
    # Views 0 and 1 see a point at depth 3; view 3 sees points at depth 1 and 2
    lid = row_scene.add_landmark(np.array([0.5, 0.0, 3.0]))
    row_scene.add_observation(lid, 0, np.array([60.0, 50.0]))
    row_scene.add_observation(lid, 1, np.array([40.0, 50.0]))
    for z in (1.0, 2.0):
        lid = row_scene.add_landmark(np.array([10.0, 0.0, z]))
        row_scene.add_observation(lid, 3, np.array([50.0, 50.0]))

    frustum_filter = FrustumFilter(row_scene)
    assert frustum_filter.is_truncated
    assert frustum_filter.z_near_z_far_per_view == {0: (3.0, 3.0), 1: (3.0, 3.0), 3: (1.0, 2.0)}
    assert sorted(frustum_filter.frustum_per_view) == [0, 1, 3]
    assert frustum_filter.get_frustum_intersection_pairs() == {(0, 1)}
    assert frustum_filter.stats['num_tests'] == 3


def test_config_values_and_overrides(row_scene):
    config = FrustumFilterConfig(z_near=0.5, z_far=5.0, num_workers=2)
    assert FrustumFilter(row_scene, config=config).is_truncated
    overridden = FrustumFilter(row_scene, z_near=-1, z_far=-1, config=config)
    assert not overridden.is_truncated


def test_ineligible_views_absent_everywhere(mixed_scene, tmp_path):
    frustum_filter = FrustumFilter(mixed_scene, z_near=0.5, z_far=5.0)
    pairs = frustum_filter.get_frustum_intersection_pairs()
    assert {v for p in pairs for v in p} <= {0, 1, 2}
    assert 5 in frustum_filter.z_near_z_far_per_view
    assert 5 not in frustum_filter.frustum_per_view

    ply = tmp_path / "frustums.ply"
    assert frustum_filter.export_ply(ply)
    assert "element vertex 24" in ply.read_text()


def test_export_pairs_and_summary(row_scene, tmp_path):
    frustum_filter = FrustumFilter(row_scene, z_near=0.5, z_far=5.0)
    pairs = frustum_filter.get_frustum_intersection_pairs()
    out = tmp_path / "pairs.txt"
    assert frustum_filter.export_pairs(pairs, out)
    assert read_pairs(out) == pairs

    summary = frustum_filter.summary()
    assert "Frustums: 5 (truncated)" in summary
    assert "Overlapping pairs: 3 / 10" in summary


def test_progress_callback_forwarded(row_scene):
    calls = []
    frustum_filter = FrustumFilter(row_scene, progress_callback=lambda d, t: calls.append(t))
    frustum_filter.get_frustum_intersection_pairs()
    assert calls == [10] * 10

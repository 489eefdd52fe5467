"""
Tests for the PLY frustum export.
"""

from FrustumFiltering.algorithms import DepthRangeEstimator, FrustumBuilder
from FrustumFiltering.io import FrustumMeshExporter


def build(scene, z_near=-1, z_far=-1):
    estimator = DepthRangeEstimator(z_near, z_far)
    ranges = estimator.estimate(scene)
    return FrustumBuilder(estimator.is_truncated(scene)).build(scene, ranges)


def read_ply(path):
    """Return (declared vertex count, declared face count, vertex lines, face lines)"""
    with open(path) as f:
        lines = f.read().splitlines()
    assert lines[0] == "ply"
    assert lines[1] == "format ascii 1.0"
    end = lines.index("end_header")
    header = lines[:end]
    n_vertices = int(next(l for l in header if l.startswith("element vertex")).split()[-1])
    n_faces = int(next(l for l in header if l.startswith("element face")).split()[-1])
    body = lines[end + 1:]
    return n_vertices, n_faces, body[:n_vertices], body[n_vertices:]


def test_infinite_frustums_export(row_scene, tmp_path):
    path = tmp_path / "frustums.ply"
    assert FrustumMeshExporter().export(build(row_scene), path)

    n_vertices, n_faces, vertices, faces = read_ply(path)
    assert (n_vertices, n_faces) == (25, 25)
    assert len(vertices) == 25
    assert len(faces) == 25
    assert all(len(v.split()) == 3 for v in vertices)
    assert faces[:5] == ["3 0 1 2", "3 0 2 3", "3 0 3 4", "3 0 4 1", "4 1 2 3 4"]
    assert faces[5] == "3 5 6 7"


def test_truncated_frustums_export(row_scene, tmp_path):
    path = tmp_path / "frustums.ply"
    assert FrustumMeshExporter().export(build(row_scene, 1.0, 2.0), path)

    n_vertices, n_faces, vertices, faces = read_ply(path)
    assert (n_vertices, n_faces) == (40, 30)
    assert len(vertices) == 40
    assert len(faces) == 30
    assert faces[6:12] == [
        "4 8 9 10 11",
        "4 8 9 13 12",
        "4 9 13 14 10",
        "4 11 15 14 10",
        "4 8 12 15 11",
        "4 12 13 14 15",
    ]
    assert [float(v) for v in vertices[0].split()] == [-0.5, -0.5, 1.0]


def test_face_indices_within_vertex_count(mixed_scene, tmp_path):
    path = tmp_path / "frustums.ply"
    assert FrustumMeshExporter().export(build(mixed_scene, 0.5, 3.0), path)

    n_vertices, n_faces, vertices, faces = read_ply(path)
    # only views 0-2 are exported
    assert n_vertices == 24
    assert n_faces == 18
    for face in faces:
        tokens = [int(t) for t in face.split()]
        assert tokens[0] == len(tokens) - 1
        assert all(0 <= idx < n_vertices for idx in tokens[1:])


def test_empty_collection(tmp_path):
    path = tmp_path / "empty.ply"
    assert FrustumMeshExporter().export({}, path)
    n_vertices, n_faces, vertices, faces = read_ply(path)
    assert (n_vertices, n_faces, vertices, faces) == (0, 0, [], [])


def test_unwritable_destination_fails(row_scene, tmp_path):
    path = tmp_path / "missing_dir" / "frustums.ply"
    assert FrustumMeshExporter().export(build(row_scene), path) is False
    assert not path.exists()


def test_directory_as_destination_fails(row_scene, tmp_path):
    assert FrustumMeshExporter().export(build(row_scene), tmp_path) is False

"""
I/O and Format Conversion
==========================

Scene loading, pair lists and frustum mesh export.
"""

from .colmap_reader import read_colmap_model, parse_camera_line, COLMAP_CAMERA_MODELS
from .pair_writer import write_pairs, read_pairs
from .ply_exporter import FrustumMeshExporter

__all__ = [
    'read_colmap_model',
    'parse_camera_line',
    'COLMAP_CAMERA_MODELS',
    'write_pairs',
    'read_pairs',
    'FrustumMeshExporter',
]

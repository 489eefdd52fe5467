"""
Frustum Mesh Export
===================

Write a frustum collection as an ASCII PLY polygon mesh for inspection
(MeshLab, CloudCompare, Blender...).
"""

from pathlib import Path
from typing import Dict, Union

from ..geometry import Frustum
from ..logger import get_logger


class FrustumMeshExporter:
    """
    Export frustums to ASCII PLY.

    Infinite frustums are drawn as a normalized cone (apex + corners at unit
    depth, 4 triangles + 1 quad); truncated frustums as closed hexahedra (6 quads).
    """

    def __init__(self):
        self.logger = get_logger("ply")

    def export(self, frustums: Dict[int, Frustum], filename: Union[str, Path]) -> bool:
        """
        Write all frustums to a PLY file.

        Args:
            frustums: Mapping view id -> frustum, written in iteration order
            filename: Destination path

        Returns:
            True if the file was fully written and closed, False otherwise
        """
        vertex_count = sum(f.num_vertices for f in frustums.values())
        face_count = sum(f.num_faces for f in frustums.values())

        try:
            with open(filename, 'w') as of:
                of.write("ply\n"
                         "format ascii 1.0\n"
                         f"element vertex {vertex_count}\n"
                         "property float x\n"
                         "property float y\n"
                         "property float z\n"
                         f"element face {face_count}\n"
                         "property list uchar int vertex_index\n"
                         "end_header\n")

                for frustum in frustums.values():
                    for x, y, z in frustum.points:
                        of.write(f"{float(x)} {float(y)} {float(z)}\n")

                # Faces index vertices through a running offset over all frustums
                count = 0
                for frustum in frustums.values():
                    for face in frustum.faces:
                        indices = " ".join(str(count + i) for i in face)
                        of.write(f"{len(face)} {indices}\n")
                    count += frustum.num_vertices

                of.flush()
        except OSError as e:
            self.logger.error(f"Could not export frustums to {filename}: {e}")
            return False

        self.logger.info(f"Exported {len(frustums)} frustums "
                         f"({vertex_count} vertices, {face_count} faces) to {filename}")
        return True

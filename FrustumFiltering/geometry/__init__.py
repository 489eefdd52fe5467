"""
Geometry Module

Convex primitives used by the frustum filter:
- HalfPlane: closed half-space n.x + d <= 0
- Frustum: infinite or truncated camera visibility volume
"""

from .half_plane import HalfPlane, intersect_half_planes, half_planes_to_constraints
from .frustum import Frustum, INFINITE_FACES, TRUNCATED_FACES

__all__ = [
    'HalfPlane',
    'Frustum',
    'intersect_half_planes',
    'half_planes_to_constraints',
    'INFINITE_FACES',
    'TRUNCATED_FACES',
]

"""
Camera frustum

Visibility volume of a pinhole camera, either infinite (a pyramid with its apex
at the camera center) or truncated by near and far planes. The frustum is
stored both as supporting points (for drawing/export) and as bounding half-planes
(for the intersection test).
"""

from typing import List, Optional, Tuple

import numpy as np

from .half_plane import HalfPlane, intersect_half_planes


# Face topology, as indices into Frustum.points
# Infinite: apex + 4 corner points at unit depth -> 4 triangles + 1 quad
INFINITE_FACES: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2),
    (0, 2, 3),
    (0, 3, 4),
    (0, 4, 1),
    (1, 2, 3, 4),
)

# Truncated: 4 near corners then 4 far corners -> closed hexahedron
TRUNCATED_FACES: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2, 3),
    (0, 1, 5, 4),
    (1, 5, 6, 2),
    (3, 7, 6, 2),
    (0, 4, 7, 3),
    (4, 5, 6, 7),
)


def _image_corner_rays(width: float, height: float, K: np.ndarray, R: np.ndarray) -> np.ndarray:
    """World-frame rays through the four image corners, scaled to unit depth"""
    K_inv = np.linalg.inv(K)
    corners = np.array([
        [0.0, 0.0, 1.0],
        [width, 0.0, 1.0],
        [width, height, 1.0],
        [0.0, height, 1.0],
    ])
    rays_cam = (K_inv @ corners.T).T
    rays_cam = rays_cam / rays_cam[:, 2:3]
    return (R.T @ rays_cam.T).T


class Frustum:
    """
    Frustum of a pinhole camera.

    Built infinite when z_near/z_far are omitted, truncated otherwise.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        K: Calibration matrix (3x3)
        R: World-to-camera rotation (3x3)
        C: Camera center (3,)
        z_near: Near plane depth (truncated frustum only)
        z_far: Far plane depth (truncated frustum only)
    """

    def __init__(self, width: float, height: float, K: np.ndarray, R: np.ndarray,
                 C: np.ndarray, z_near: Optional[float] = None, z_far: Optional[float] = None):
        if (z_near is None) != (z_far is None):
            raise ValueError("z_near and z_far must be given together")

        K = np.asarray(K, dtype=np.float64).reshape(3, 3)
        R = np.asarray(R, dtype=np.float64).reshape(3, 3)
        C = np.asarray(C, dtype=np.float64).reshape(3)

        self._infinite = z_near is None
        self.z_near = -1.0 if self._infinite else float(z_near)
        self.z_far = -1.0 if self._infinite else float(z_far)
        self.center = C

        rays = _image_corner_rays(width, height, K, R)
        axis = R[2]
        inside = C + R.T @ (np.linalg.inv(K) @ np.array([width / 2.0, height / 2.0, 1.0]))

        planes = [
            HalfPlane.from_points(C, C + rays[i], C + rays[(i + 1) % 4]).oriented_towards(inside)
            for i in range(4)
        ]

        if self._infinite:
            points = np.vstack([C, C + rays])
        else:
            planes.append(HalfPlane.from_normal_point(-axis, C + axis * self.z_near))
            planes.append(HalfPlane.from_normal_point(axis, C + axis * self.z_far))
            points = np.vstack([C + rays * self.z_near, C + rays * self.z_far])

        points.setflags(write=False)
        self._points = points
        self._planes = tuple(planes)

    @property
    def is_infinite(self) -> bool:
        return self._infinite

    @property
    def is_truncated(self) -> bool:
        return not self._infinite

    @property
    def points(self) -> np.ndarray:
        """Supporting points: apex + 4 unit-depth corners, or 4 near + 4 far corners"""
        return self._points

    @property
    def planes(self) -> Tuple[HalfPlane, ...]:
        return self._planes

    @property
    def faces(self) -> Tuple[Tuple[int, ...], ...]:
        return INFINITE_FACES if self._infinite else TRUNCATED_FACES

    @property
    def num_vertices(self) -> int:
        return len(self._points)

    @property
    def num_faces(self) -> int:
        return len(self.faces)

    def contains(self, X: np.ndarray, tol: float = 1e-9) -> bool:
        return all(hp.contains(X, tol) for hp in self._planes)

    def intersects(self, other: 'Frustum') -> bool:
        """True if the two frustums share at least one point"""
        planes: List[HalfPlane] = list(self._planes) + list(other.planes)
        return intersect_half_planes(planes)

    def __repr__(self):
        kind = "infinite" if self._infinite else f"truncated [{self.z_near:.3f}, {self.z_far:.3f}]"
        return f"Frustum({kind}, center={np.round(self.center, 3).tolist()})"

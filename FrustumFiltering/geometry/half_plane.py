"""
Half-plane primitive

A half-plane is the closed half-space {x : n.x + d <= 0} of R^3. Convex regions
such as camera frustums are stored as lists of half-planes, and two regions overlap
iff the union of their half-plane lists still admits a point.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from scipy.optimize import linprog


@dataclass(frozen=True, eq=False)
class HalfPlane:
    """
    Closed half-space n.x + d <= 0.

    Attributes:
        normal: Unit outward normal (3,)
        offset: Signed offset d
    """
    normal: np.ndarray
    offset: float

    @staticmethod
    def from_normal_point(normal: np.ndarray, point: np.ndarray) -> 'HalfPlane':
        """Half-space bounded by the plane through `point`, with outward `normal`"""
        normal = np.asarray(normal, dtype=np.float64)
        normal = normal / np.linalg.norm(normal)
        return HalfPlane(normal=normal, offset=float(-normal @ np.asarray(point, dtype=np.float64)))

    @staticmethod
    def from_points(p: np.ndarray, q: np.ndarray, r: np.ndarray) -> 'HalfPlane':
        """Half-space bounded by the plane through three points, normal (q - p) x (r - p)"""
        p = np.asarray(p, dtype=np.float64)
        normal = np.cross(np.asarray(q) - p, np.asarray(r) - p)
        norm = np.linalg.norm(normal)
        if norm == 0.0:
            raise ValueError("Cannot build a half-plane from collinear points")
        return HalfPlane.from_normal_point(normal / norm, p)

    def signed_distance(self, x: np.ndarray) -> float:
        return float(self.normal @ np.asarray(x, dtype=np.float64) + self.offset)

    def contains(self, x: np.ndarray, tol: float = 1e-9) -> bool:
        return self.signed_distance(x) <= tol

    def flipped(self) -> 'HalfPlane':
        return HalfPlane(normal=-self.normal, offset=-self.offset)

    def oriented_towards(self, inside: np.ndarray) -> 'HalfPlane':
        """Return this half-plane or its complement, whichever contains `inside`"""
        return self if self.contains(inside) else self.flipped()


def half_planes_to_constraints(planes: Sequence[HalfPlane]):
    """Stack half-planes as A x <= b"""
    A = np.array([hp.normal for hp in planes], dtype=np.float64).reshape(-1, 3)
    b = np.array([-hp.offset for hp in planes], dtype=np.float64)
    return A, b


def intersect_half_planes(planes: List[HalfPlane]) -> bool:
    """
    Test whether the intersection of half-planes is non-empty.

    Solved as a feasibility linear program (zero objective, free variables).

    Args:
        planes: Half-planes to intersect

    Returns:
        True if at least one point satisfies every constraint
    """
    if not planes:
        return True

    A, b = half_planes_to_constraints(planes)
    result = linprog(
        c=np.zeros(3),
        A_ub=A,
        b_ub=b,
        bounds=[(None, None)] * 3,
        method='highs'
    )
    # status 0: optimal (feasible); 2: infeasible
    return result.status == 0

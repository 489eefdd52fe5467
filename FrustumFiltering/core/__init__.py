"""
Core data structures shared by the frustum filtering components.
"""

from .structures import (
    IntrinsicType,
    PinholeIntrinsics,
    GenericIntrinsics,
    Pose,
    View,
    Observation,
    Landmark,
    SfMScene
)

__all__ = [
    'IntrinsicType',
    'PinholeIntrinsics',
    'GenericIntrinsics',
    'Pose',
    'View',
    'Observation',
    'Landmark',
    'SfMScene',
]

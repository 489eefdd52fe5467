from .scene import (
    IntrinsicType,
    PinholeIntrinsics,
    GenericIntrinsics,
    Intrinsics,
    intrinsics_from_dict,
    Pose,
    View,
    Observation,
    Landmark,
    SfMScene
)

__all__ = [
    # Enumerations
    'IntrinsicType',

    # Classes
    'PinholeIntrinsics',
    'GenericIntrinsics',
    'Intrinsics',
    'Pose',
    'View',
    'Observation',
    'Landmark',
    'SfMScene',

    # Utilities
    'intrinsics_from_dict',
]

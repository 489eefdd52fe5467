"""
Scene data structures

Views, camera intrinsics, poses and landmarks of a reconstructed multi-view scene.
The frustum filter only reads these structures.
"""

import pickle
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

import numpy as np


class IntrinsicType(Enum):
    """Camera model kinds"""
    PINHOLE_CAMERA = "pinhole"
    PINHOLE_CAMERA_RADIAL1 = "radial1"
    PINHOLE_CAMERA_RADIAL3 = "radial3"
    PINHOLE_CAMERA_BROWN = "brown"
    PINHOLE_CAMERA_FISHEYE = "fisheye4"
    PINHOLE_CAMERA_FISHEYE1 = "fisheye1"
    EQUIDISTANT_CAMERA = "equidistant"
    EQUIDISTANT_CAMERA_RADIAL3 = "equidistant_r3"
    UNKNOWN = "unknown"

    @property
    def is_pinhole(self) -> bool:
        return self in _PINHOLE_TYPES


_PINHOLE_TYPES = {
    IntrinsicType.PINHOLE_CAMERA,
    IntrinsicType.PINHOLE_CAMERA_RADIAL1,
    IntrinsicType.PINHOLE_CAMERA_RADIAL3,
    IntrinsicType.PINHOLE_CAMERA_BROWN,
    IntrinsicType.PINHOLE_CAMERA_FISHEYE,
    IntrinsicType.PINHOLE_CAMERA_FISHEYE1,
}


@dataclass(eq=False)
class PinholeIntrinsics:
    """Pinhole-class camera: pixel size and 3x3 calibration matrix"""
    width: int
    height: int
    K: np.ndarray
    type: IntrinsicType = IntrinsicType.PINHOLE_CAMERA
    distortion: List[float] = field(default_factory=list)

    def __post_init__(self):
        if not self.type.is_pinhole:
            raise ValueError(f"{self.type.name} is not a pinhole camera model")
        self.K = np.asarray(self.K, dtype=np.float64).reshape(3, 3)

    def as_pinhole(self) -> 'PinholeIntrinsics':
        return self

    @classmethod
    def from_focal(cls, width: int, height: int, focal: float,
                   cx: Optional[float] = None, cy: Optional[float] = None,
                   **kwargs) -> 'PinholeIntrinsics':
        """Build a pinhole camera with square pixels, principal point at the centre by default"""
        cx = width / 2.0 if cx is None else cx
        cy = height / 2.0 if cy is None else cy
        K = np.array([[focal, 0.0, cx],
                      [0.0, focal, cy],
                      [0.0, 0.0, 1.0]])
        return cls(width=width, height=height, K=K, **kwargs)

    def to_dict(self) -> Dict:
        return {
            'type': self.type.value,
            'width': self.width,
            'height': self.height,
            'K': self.K,
            'distortion': list(self.distortion)
        }


@dataclass
class GenericIntrinsics:
    """Any non-pinhole camera model; only its type and raw parameters are kept"""
    width: int
    height: int
    type: IntrinsicType = IntrinsicType.UNKNOWN
    params: List[float] = field(default_factory=list)

    def as_pinhole(self) -> Optional[PinholeIntrinsics]:
        return None

    def to_dict(self) -> Dict:
        return {
            'type': self.type.value,
            'width': self.width,
            'height': self.height,
            'params': list(self.params)
        }


Intrinsics = Union[PinholeIntrinsics, GenericIntrinsics]


def intrinsics_from_dict(data: Dict) -> Intrinsics:
    """Create the matching intrinsics variant from a dictionary"""
    intrinsic_type = IntrinsicType(data['type'])
    if intrinsic_type.is_pinhole:
        return PinholeIntrinsics(
            width=data['width'],
            height=data['height'],
            K=np.asarray(data['K']),
            type=intrinsic_type,
            distortion=list(data.get('distortion', []))
        )
    return GenericIntrinsics(
        width=data['width'],
        height=data['height'],
        type=intrinsic_type,
        params=list(data.get('params', []))
    )


@dataclass(eq=False)
class Pose:
    """
    Rigid camera pose.

    Attributes:
        rotation: World-to-camera rotation (3x3)
        center: Camera center in world coordinates (3,)
    """
    rotation: np.ndarray
    center: np.ndarray

    def __post_init__(self):
        self.rotation = np.asarray(self.rotation, dtype=np.float64).reshape(3, 3)
        self.center = np.asarray(self.center, dtype=np.float64).reshape(3)

    @staticmethod
    def from_rt(R: np.ndarray, t: np.ndarray) -> 'Pose':
        """Create from a world-to-camera [R|t]"""
        R = np.asarray(R, dtype=np.float64).reshape(3, 3)
        t = np.asarray(t, dtype=np.float64).reshape(3)
        return Pose(rotation=R, center=-R.T @ t)

    @property
    def translation(self) -> np.ndarray:
        return -self.rotation @ self.center

    def depth(self, X: np.ndarray) -> float:
        """Signed depth of a world point along the camera viewing axis"""
        return float(self.rotation[2] @ (np.asarray(X, dtype=np.float64) - self.center))

    def to_dict(self) -> Dict:
        return {'rotation': self.rotation, 'center': self.center}

    @staticmethod
    def from_dict(data: Dict) -> 'Pose':
        return Pose(rotation=data['rotation'], center=data['center'])


@dataclass
class View:
    """One image of the scene"""
    view_id: int
    intrinsic_id: int
    pose_id: Optional[int] = None
    image_path: str = ""

    def to_dict(self) -> Dict:
        return {
            'view_id': self.view_id,
            'intrinsic_id': self.intrinsic_id,
            'pose_id': self.pose_id,
            'image_path': self.image_path
        }

    @staticmethod
    def from_dict(data: Dict) -> 'View':
        return View(
            view_id=data['view_id'],
            intrinsic_id=data['intrinsic_id'],
            pose_id=data.get('pose_id'),
            image_path=data.get('image_path', "")
        )


@dataclass(eq=False)
class Observation:
    """2D measurement of a landmark in one view"""
    x: np.ndarray
    feature_id: Optional[int] = None

    def to_dict(self) -> Dict:
        return {'x': self.x, 'feature_id': self.feature_id}

    @staticmethod
    def from_dict(data: Dict) -> 'Observation':
        return Observation(x=data['x'], feature_id=data.get('feature_id'))


@dataclass(eq=False)
class Landmark:
    """Reconstructed 3D point with its per-view observations"""
    X: np.ndarray
    observations: Dict[int, Observation] = field(default_factory=dict)
    color: Optional[np.ndarray] = None

    def to_dict(self) -> Dict:
        return {
            'X': self.X,
            'observations': {vid: obs.to_dict() for vid, obs in self.observations.items()},
            'color': self.color
        }

    @staticmethod
    def from_dict(data: Dict) -> 'Landmark':
        return Landmark(
            X=data['X'],
            observations={int(vid): Observation.from_dict(obs)
                          for vid, obs in data.get('observations', {}).items()},
            color=data.get('color')
        )


class SfMScene:
    """
    Container for a reconstructed scene.

    Holds views, intrinsics, poses and landmarks, all keyed by integer id.
    A view is usable for geometry once both its pose and its intrinsics
    resolve in this container.
    """

    def __init__(self):
        self.views: Dict[int, View] = {}
        self.intrinsics: Dict[int, Intrinsics] = {}
        self.poses: Dict[int, Pose] = {}
        self.landmarks: Dict[int, Landmark] = {}

        self.metadata = {
            'created_at': datetime.now().isoformat()
        }

        self._next_landmark_id = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_intrinsics(self, intrinsic_id: int, intrinsics: Intrinsics) -> None:
        self.intrinsics[intrinsic_id] = intrinsics

    def add_view(self, view_id: int, intrinsic_id: int, pose: Optional[Pose] = None,
                 image_path: str = "") -> View:
        """Add a view; when a pose is given it is stored under the view id"""
        pose_id = None
        if pose is not None:
            self.poses[view_id] = pose
            pose_id = view_id
        view = View(view_id=view_id, intrinsic_id=intrinsic_id,
                    pose_id=pose_id, image_path=image_path)
        self.views[view_id] = view
        return view

    def add_landmark(self, X: np.ndarray, observations: Optional[Dict[int, Observation]] = None,
                     color: Optional[np.ndarray] = None, landmark_id: Optional[int] = None) -> int:
        """Add a 3D point and return its ID (next free id unless one is given)"""
        if landmark_id is None:
            landmark_id = self._next_landmark_id
        self._next_landmark_id = max(self._next_landmark_id, landmark_id + 1)
        self.landmarks[landmark_id] = Landmark(
            X=np.asarray(X, dtype=np.float64),
            observations=dict(observations or {}),
            color=color
        )
        return landmark_id

    def add_observation(self, landmark_id: int, view_id: int, x: np.ndarray,
                        feature_id: Optional[int] = None) -> None:
        self.landmarks[landmark_id].observations[view_id] = Observation(
            x=np.asarray(x, dtype=np.float64), feature_id=feature_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def has_structure(self) -> bool:
        return len(self.landmarks) > 0

    def is_pose_defined(self, view: View) -> bool:
        return view.pose_id is not None and view.pose_id in self.poses

    def is_pose_and_intrinsic_defined(self, view: View) -> bool:
        return self.is_pose_defined(view) and view.intrinsic_id in self.intrinsics

    def get_pose(self, view: View) -> Optional[Pose]:
        if not self.is_pose_defined(view):
            return None
        return self.poses[view.pose_id]

    def get_intrinsics(self, view: View) -> Optional[Intrinsics]:
        return self.intrinsics.get(view.intrinsic_id)

    def valid_views(self) -> List[View]:
        """Views with resolved pose and intrinsics, by ascending id"""
        return [self.views[vid] for vid in sorted(self.views)
                if self.is_pose_and_intrinsic_defined(self.views[vid])]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict:
        """Convert scene to dictionary for serialization"""
        return {
            'views': {vid: view.to_dict() for vid, view in self.views.items()},
            'intrinsics': {iid: intr.to_dict() for iid, intr in self.intrinsics.items()},
            'poses': {pid: pose.to_dict() for pid, pose in self.poses.items()},
            'landmarks': {lid: lm.to_dict() for lid, lm in self.landmarks.items()},
            'metadata': self.metadata
        }

    @staticmethod
    def from_dict(data: Dict) -> 'SfMScene':
        """Create scene from dictionary"""
        scene = SfMScene()

        for vid, view_data in data.get('views', {}).items():
            scene.views[int(vid)] = View.from_dict(view_data)

        for iid, intr_data in data.get('intrinsics', {}).items():
            scene.intrinsics[int(iid)] = intrinsics_from_dict(intr_data)

        for pid, pose_data in data.get('poses', {}).items():
            scene.poses[int(pid)] = Pose.from_dict(pose_data)

        for lid, lm_data in data.get('landmarks', {}).items():
            lid = int(lid)
            scene.landmarks[lid] = Landmark.from_dict(lm_data)
            scene._next_landmark_id = max(scene._next_landmark_id, lid + 1)

        scene.metadata = data.get('metadata', {})
        return scene

    def save(self, filepath: str) -> None:
        """Save scene to a pickle file"""
        with open(filepath, 'wb') as f:
            pickle.dump(self.to_dict(), f)

    @staticmethod
    def load(filepath: str) -> 'SfMScene':
        """Load scene from a pickle file written by save()"""
        with open(filepath, 'rb') as f:
            data = pickle.load(f)
        return SfMScene.from_dict(data)

    def summary(self) -> str:
        """Get scene summary"""
        num_valid = len(self.valid_views())
        num_observations = sum(len(lm.observations) for lm in self.landmarks.values())
        lines = [
            "=" * 70,
            "SCENE SUMMARY",
            "=" * 70,
            f"Views: {len(self.views)} ({num_valid} with pose and intrinsics)",
            f"Intrinsics: {len(self.intrinsics)}",
            f"Poses: {len(self.poses)}",
            f"Landmarks: {len(self.landmarks)}",
            f"Observations: {num_observations}",
            "=" * 70
        ]
        return "\n".join(lines)

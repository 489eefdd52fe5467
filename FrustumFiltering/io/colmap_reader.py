"""
COLMAP text model reader
========================

Load a sparse reconstruction exported in COLMAP text format:

    <model_dir>/
        cameras.txt
        images.txt
        points3D.txt

COLMAP cameras become intrinsics, images become views (with their pose),
and 3D points become landmarks observed by the images of their track.
"""

from pathlib import Path
from typing import Dict, List, Tuple, Union

import numpy as np
from scipy.spatial.transform import Rotation

from ..core.structures import (
    GenericIntrinsics,
    IntrinsicType,
    Intrinsics,
    PinholeIntrinsics,
    Pose,
    SfMScene
)
from ..logger import get_logger


logger = get_logger("colmap")

# COLMAP model -> (intrinsic type, number of params)
COLMAP_CAMERA_MODELS = {
    'SIMPLE_PINHOLE': (IntrinsicType.PINHOLE_CAMERA, 3),
    'PINHOLE': (IntrinsicType.PINHOLE_CAMERA, 4),
    'SIMPLE_RADIAL': (IntrinsicType.PINHOLE_CAMERA_RADIAL1, 4),
    'RADIAL': (IntrinsicType.PINHOLE_CAMERA_RADIAL3, 5),
    'OPENCV': (IntrinsicType.PINHOLE_CAMERA_BROWN, 8),
    'FULL_OPENCV': (IntrinsicType.PINHOLE_CAMERA_BROWN, 12),
    'OPENCV_FISHEYE': (IntrinsicType.PINHOLE_CAMERA_FISHEYE, 8),
    'FOV': (IntrinsicType.PINHOLE_CAMERA_FISHEYE1, 5),
}

# Models whose params start with a single focal length (f, cx, cy, ...)
_SINGLE_FOCAL_MODELS = {'SIMPLE_PINHOLE', 'SIMPLE_RADIAL', 'RADIAL'}


def _data_lines(path: Path) -> List[str]:
    """Lines of a COLMAP text file without comments (empty lines are kept)"""
    with open(path, 'r') as f:
        return [line.rstrip('\n') for line in f if not line.startswith('#')]


def parse_camera_line(line: str) -> Tuple[int, Intrinsics]:
    """
    Parse one line of cameras.txt.

    Returns:
        (camera id, intrinsics)
    """
    tokens = line.split()
    if len(tokens) < 4:
        raise ValueError(f"Invalid camera line: '{line}'")

    camera_id = int(tokens[0])
    model = tokens[1]
    width, height = int(tokens[2]), int(tokens[3])
    params = [float(p) for p in tokens[4:]]

    if model not in COLMAP_CAMERA_MODELS:
        return camera_id, GenericIntrinsics(width=width, height=height,
                                            type=IntrinsicType.UNKNOWN, params=params)

    intrinsic_type, num_params = COLMAP_CAMERA_MODELS[model]
    if len(params) != num_params:
        raise ValueError(f"Camera {camera_id}: {model} expects {num_params} params, got {len(params)}")

    if model in _SINGLE_FOCAL_MODELS:
        fx = fy = params[0]
        cx, cy = params[1], params[2]
        distortion = params[3:]
    else:
        fx, fy, cx, cy = params[:4]
        distortion = params[4:]

    K = np.array([[fx, 0.0, cx],
                  [0.0, fy, cy],
                  [0.0, 0.0, 1.0]])
    return camera_id, PinholeIntrinsics(width=width, height=height, K=K,
                                        type=intrinsic_type, distortion=distortion)


def read_colmap_model(model_dir: Union[str, Path]) -> SfMScene:
    """
    Read a COLMAP text model into a scene.

    Args:
        model_dir: Directory containing cameras.txt, images.txt and points3D.txt
            (points3D.txt is optional)

    Returns:
        Scene with intrinsics, posed views and landmarks

    Raises:
        FileNotFoundError: If cameras.txt or images.txt is missing
        ValueError: If a line cannot be parsed
    """
    model_dir = Path(model_dir)
    cameras_file = model_dir / "cameras.txt"
    images_file = model_dir / "images.txt"
    points_file = model_dir / "points3D.txt"

    for required in (cameras_file, images_file):
        if not required.exists():
            raise FileNotFoundError(f"COLMAP model file not found: {required}")

    scene = SfMScene()
    scene.metadata['source'] = str(model_dir)

    # cameras.txt
    for line in _data_lines(cameras_file):
        if not line.strip():
            continue
        camera_id, intrinsics = parse_camera_line(line)
        scene.add_intrinsics(camera_id, intrinsics)

    # images.txt: two lines per image, the second one (2D points) may be empty
    points2d: Dict[int, np.ndarray] = {}
    lines = _data_lines(images_file)
    while lines and not lines[-1].strip():
        lines.pop()
    for k in range(0, len(lines), 2):
        tokens = lines[k].split()
        if len(tokens) < 10:
            raise ValueError(f"Invalid image line: '{lines[k]}'")

        image_id = int(tokens[0])
        qw, qx, qy, qz = (float(v) for v in tokens[1:5])
        t = np.array([float(v) for v in tokens[5:8]])
        camera_id = int(tokens[8])
        name = " ".join(tokens[9:])

        R = Rotation.from_quat([qx, qy, qz, qw]).as_matrix()
        scene.add_view(image_id, camera_id, pose=Pose.from_rt(R, t), image_path=name)

        point_tokens = lines[k + 1].split() if k + 1 < len(lines) else []
        xy = np.array([float(v) for v in point_tokens], dtype=np.float64).reshape(-1, 3)
        points2d[image_id] = xy[:, :2]

    # points3D.txt
    if points_file.exists():
        for line in _data_lines(points_file):
            tokens = line.split()
            if not tokens:
                continue
            if len(tokens) < 8 or (len(tokens) - 8) % 2 != 0:
                raise ValueError(f"Invalid point line: '{line}'")

            point_id = int(tokens[0])
            X = np.array([float(v) for v in tokens[1:4]])
            color = np.array([int(v) for v in tokens[4:7]], dtype=np.uint8)
            landmark_id = scene.add_landmark(X, color=color, landmark_id=point_id)

            track = [int(v) for v in tokens[8:]]
            for image_id, point2d_idx in zip(track[0::2], track[1::2]):
                image_points = points2d.get(image_id)
                if image_points is not None and point2d_idx < len(image_points):
                    x = image_points[point2d_idx]
                else:
                    x = np.full(2, np.nan)
                scene.add_observation(landmark_id, image_id, x, feature_id=point2d_idx)
    else:
        logger.warning(f"No points3D.txt in {model_dir}, scene has no structure")

    logger.info(f"Loaded COLMAP model: {len(scene.intrinsics)} cameras, "
                f"{len(scene.views)} images, {len(scene.landmarks)} points")
    return scene

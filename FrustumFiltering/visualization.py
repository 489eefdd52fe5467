"""
Visualization of camera frustums and their overlap graph.
"""

from pathlib import Path
from typing import Dict, Optional, Set, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers the 3d projection)

from .geometry import Frustum


def _frustum_edges(frustum: Frustum):
    """Unique edges of the frustum faces, as index pairs"""
    edges = set()
    for face in frustum.faces:
        for a, b in zip(face, face[1:] + face[:1]):
            edges.add((min(a, b), max(a, b)))
    return sorted(edges)


def plot_frustums(frustums: Dict[int, Frustum],
                  pairs: Optional[Set[Tuple[int, int]]] = None,
                  ax=None,
                  show_ids: bool = True,
                  title: str = "Camera Frustums"):
    """
    Draw frustum wireframes, optionally linking the centers of overlapping views

    Args:
        frustums: Mapping view id -> frustum
        pairs: Overlapping view pairs to draw as links between camera centers
        ax: Existing 3D axes (a new figure is created if None)
        show_ids: Label each camera center with its view id
        title: Plot title

    Returns:
        The 3D axes
    """
    if ax is None:
        fig = plt.figure(figsize=(12, 9))
        ax = fig.add_subplot(111, projection='3d')

    colors = plt.cm.tab10(np.linspace(0, 1, max(len(frustums), 1)))

    for color, (view_id, frustum) in zip(colors, frustums.items()):
        points = frustum.points
        for a, b in _frustum_edges(frustum):
            ax.plot([points[a, 0], points[b, 0]],
                    [points[a, 1], points[b, 1]],
                    [points[a, 2], points[b, 2]],
                    color=color, linewidth=0.8)
        if show_ids:
            c = frustum.center
            ax.text(c[0], c[1], c[2], str(view_id), fontsize=8)

    if pairs:
        for i, j in sorted(pairs):
            if i not in frustums or j not in frustums:
                continue
            ci, cj = frustums[i].center, frustums[j].center
            ax.plot([ci[0], cj[0]], [ci[1], cj[1]], [ci[2], cj[2]],
                    'k--', linewidth=0.5, alpha=0.5)

    ax.set_title(f"{title} ({len(frustums)} views"
                 + (f", {len(pairs)} pairs)" if pairs is not None else ")"))
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_zlabel("Z")
    return ax


def save_frustum_plot(frustums: Dict[int, Frustum],
                      output_path: Union[str, Path],
                      pairs: Optional[Set[Tuple[int, int]]] = None,
                      dpi: int = 150) -> Path:
    """Render plot_frustums to an image file"""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig = plt.figure(figsize=(12, 9))
    ax = fig.add_subplot(111, projection='3d')
    plot_frustums(frustums, pairs=pairs, ax=ax)
    fig.savefig(output_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    return output_path

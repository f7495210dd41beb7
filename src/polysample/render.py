"""
matplotlib rendering of sampling results, one panel per method.
"""

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Polygon as PolygonPatch, Rectangle
from typing import List, Optional

from .geometry import PolygonGeometry
from .runner import SamplingResult


def draw_sampling(ax: plt.Axes, geometry: PolygonGeometry, result: SamplingResult, radius: float) -> None:
    """Draw outline, bounding box, points and their radius circles on ``ax``."""
    box = geometry.bounding_box

    for ring in geometry.polygons:
        ax.add_patch(PolygonPatch(ring, closed=True, fill=False, edgecolor="black", linewidth=1))
    ax.add_patch(Rectangle((box.min_x, box.min_y), box.width, box.height,
                           fill=False, edgecolor="black", linewidth=1))

    if result.points:
        xs, ys = zip(*result.points)
        ax.scatter(xs, ys, s=9, color=result.color, zorder=3)
    for point in result.points:
        ax.add_patch(Circle(point, radius, fill=False, edgecolor=result.color, linewidth=1))

    ax.set_title(result.summary, fontsize=11, fontweight="bold")
    ax.set_xlim(box.min_x - radius, box.max_x + radius)
    # screen orientation, y grows downwards
    ax.set_ylim(box.max_y + radius, box.min_y - radius)
    ax.set_aspect("equal")


def render_all(geometry: PolygonGeometry, results: List[SamplingResult], radius: float,
               path: Optional[str] = None) -> plt.Figure:
    """Side-by-side figure of all results, optionally saved to ``path``."""
    fig, axes = plt.subplots(1, len(results), figsize=(4.5 * len(results), 4.5), squeeze=False)
    for ax, result in zip(axes[0], results):
        draw_sampling(ax, geometry, result, radius)
    fig.tight_layout()

    if path is not None:
        fig.savefig(path)
        print(f"Saved figure: {path}")
    return fig

"""
Geometry utilities for polygon sampling.

Contains:
- BoundingBox: axis-aligned bounds of a polygon
- PolygonGeometry: bounding box, point-in-polygon tests
- PoissonGrid: fixed-size background grid for Poisson-disk conflict checks
"""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import List, Sequence, Union

from .config import GridKey, Point, Polygon


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box given by its corner and size."""
    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    @property
    def center(self) -> Point:
        """Box centre truncated to integer coordinates."""
        return (int(self.min_x + self.width / 2), int(self.min_y + self.height / 2))


class PolygonGeometry:
    """Handles geometric calculations for polygon boundaries.

    Several rings may be given; containment follows the even-odd rule so an
    inner ring cuts a hole. Vertices are copied and never modified.
    """

    def __init__(self, polygons: List[Polygon], epsilon: float = 1e-10):
        self.polygons = [np.array(p, dtype=float) for p in polygons]
        self.epsilon = epsilon
        self._compute_bounds()

    @classmethod
    def from_vertices(cls, vertices: Union[Polygon, Sequence[Sequence[float]]],
                      epsilon: float = 1e-10) -> "PolygonGeometry":
        """Build a geometry from a single ring of vertices."""
        return cls([np.asarray(vertices, dtype=float)], epsilon)

    def _compute_bounds(self) -> None:
        all_vertices = np.vstack(self.polygons)
        self.min_coords = np.min(all_vertices, axis=0)
        self.max_coords = np.max(all_vertices, axis=0)
        size = self.max_coords - self.min_coords
        self.bounding_box = BoundingBox(
            min_x=float(self.min_coords[0]),
            min_y=float(self.min_coords[1]),
            width=float(size[0]),
            height=float(size[1]),
        )

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a single point is inside the polygon (even-odd rule)."""
        inside = False
        for poly in self.polygons:
            n = len(poly)
            for i in range(n):
                p1, p2 = poly[i], poly[(i + 1) % n]
                if ((p1[1] > y) != (p2[1] > y)) and \
                   (x < (p2[0] - p1[0]) * (y - p1[1]) / (p2[1] - p1[1] + self.epsilon) + p1[0]):
                    inside = not inside
        return inside

    def contains_points(self, points: np.ndarray) -> np.ndarray:
        """Vectorized even-odd rule for multiple points."""
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        x, y = points[:, 0], points[:, 1]
        inside = np.zeros(len(points), dtype=bool)

        for poly in self.polygons:
            n = len(poly)
            for i in range(n):
                p1, p2 = poly[i], poly[(i + 1) % n]
                crosses_edge = (p1[1] > y) != (p2[1] > y)
                dy = p2[1] - p1[1] + self.epsilon
                x_intercept = (p2[0] - p1[0]) * (y - p1[1]) / dy + p1[0]
                inside ^= crosses_edge & (x < x_intercept)

        return inside

    def random_box_points(self, rng: np.random.Generator, count: int) -> np.ndarray:
        """Uniform real coordinates inside the bounding box, shape (count, 2)."""
        size = self.max_coords - self.min_coords
        return rng.random((count, 2)) * size + self.min_coords


@dataclass
class PoissonGrid:
    """Fixed-size background grid for Poisson-disk conflict detection.

    Cells are ``radius / sqrt(2)`` wide so each holds at most one point.
    Neighbour queries are clamped to the grid; cells beyond its edges count
    as empty.
    """
    radius: float
    origin: np.ndarray
    rows: int
    cols: int
    _points: np.ndarray = field(init=False, repr=False)
    _occupied: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.origin = np.asarray(self.origin, dtype=float)
        self._points = np.zeros((self.rows, self.cols, 2), dtype=float)
        self._occupied = np.zeros((self.rows, self.cols), dtype=bool)

    @classmethod
    def covering(cls, box: BoundingBox, radius: float) -> "PoissonGrid":
        """Grid over ``box`` with one spare row and column."""
        cell_size = radius / math.sqrt(2)
        return cls(
            radius=radius,
            origin=np.array([box.min_x, box.min_y]),
            rows=math.ceil(box.height / cell_size) + 1,
            cols=math.ceil(box.width / cell_size) + 1,
        )

    @property
    def cell_size(self) -> float:
        return self.radius / math.sqrt(2)

    def __len__(self) -> int:
        return int(np.count_nonzero(self._occupied))

    def cell_of(self, point: Point) -> GridKey:
        """(row, col) of the cell a point falls in, possibly outside the grid."""
        col = math.floor((point[0] - self.origin[0]) / self.cell_size)
        row = math.floor((point[1] - self.origin[1]) / self.cell_size)
        return (row, col)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def insert(self, point: Point) -> None:
        row, col = self.cell_of(point)
        if not self.in_bounds(row, col):
            raise IndexError(f"point {point} lies outside the grid")
        self._points[row, col] = point
        self._occupied[row, col] = True

    def has_conflict(self, point: Point) -> bool:
        """True if a stored point in the 5x5 block around ``point`` is closer than the radius."""
        row, col = self.cell_of(point)
        r0, r1 = max(row - 2, 0), min(row + 3, self.rows)
        c0, c1 = max(col - 2, 0), min(col + 3, self.cols)
        if r0 >= r1 or c0 >= c1:
            return False

        occupied = self._occupied[r0:r1, c0:c1]
        if not occupied.any():
            return False

        neighbours = self._points[r0:r1, c0:c1][occupied]
        distances = np.linalg.norm(neighbours - np.asarray(point, dtype=float), axis=1)
        return bool(np.any(distances < self.radius))

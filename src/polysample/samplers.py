"""
Point samplers for non-convex polygons.

Every sampler takes its parameters from a frozen SamplingConfig and draws
randomness only from the numpy Generator handed to ``generate_points``, so a
seeded generator reproduces a run exactly.

None of the samplers bound their work. A polygon with no interior (fewer
than three vertices, zero area) never accepts a point, and the rejection
loops then spin forever; callers that need a deadline must impose one.
"""

import math
import numpy as np
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from .config import Point, Polygon, SamplingConfig, SamplingMethod, SamplingProgress
from .geometry import PoissonGrid, PolygonGeometry

PolygonLike = Union[PolygonGeometry, Polygon]


class Sampler(ABC):
    """Generates points inside a polygon."""

    method: SamplingMethod

    def __init__(self, config: Optional[SamplingConfig] = None):
        self.config = config or SamplingConfig()

    @abstractmethod
    def generate_points(self, polygon: PolygonLike, k: int,
                        rng: Optional[np.random.Generator] = None) -> List[Point]:
        """Generate up to ``k`` points inside ``polygon``."""

    def _as_geometry(self, polygon: PolygonLike) -> PolygonGeometry:
        if isinstance(polygon, PolygonGeometry):
            return polygon
        return PolygonGeometry.from_vertices(polygon, self.config.ray_cast_epsilon)

    def _rng(self, rng: Optional[np.random.Generator]) -> np.random.Generator:
        return rng if rng is not None else np.random.default_rng(self.config.seed)


# =========================================================================
# Random Sampling
# =========================================================================

class RandomSampler(Sampler):
    """Uniform rejection sampling inside the polygon's bounding box."""

    method = SamplingMethod.RANDOM

    def generate_points(self, polygon: PolygonLike, k: int,
                        rng: Optional[np.random.Generator] = None) -> List[Point]:
        """Return exactly ``k`` points, in the order they were drawn."""
        geometry = self._as_geometry(polygon)
        rng = self._rng(rng)
        points: List[Point] = []

        while len(points) < k:
            candidates = np.trunc(geometry.random_box_points(rng, self.config.sample_batch_size))
            accepted = candidates[geometry.contains_points(candidates)]
            points.extend((int(x), int(y)) for x, y in accepted[:k - len(points)])

        return points


# =========================================================================
# Poisson-Disk Sampling
# =========================================================================

class PoissonDiskSampler(Sampler):
    """Blue-noise sampling with a minimum distance of ``config.radius``.

    Each visit to an active point spends the full ``reject_num`` attempts,
    keeping every candidate that fits, and retires the point only when the
    whole batch fails. The result may hold fewer than ``k`` points when the
    polygon fills up first.
    """

    method = SamplingMethod.POISSON

    @property
    def radius(self) -> float:
        return self.config.radius

    def generate_points(self, polygon: PolygonLike, k: int,
                        rng: Optional[np.random.Generator] = None) -> List[Point]:
        geometry = self._as_geometry(polygon)
        rng = self._rng(rng)
        if k <= 0:
            return []

        grid = PoissonGrid.covering(geometry.bounding_box, self.radius)
        first = self._seed_point(geometry, rng)
        grid.insert(first)
        points: List[Point] = [first]
        active: List[Point] = [first]
        progress = SamplingProgress(self.method, target=k, points_generated=1, active_points=1)

        while active and len(points) < k:
            index = int(rng.integers(len(active)))
            anchor = active[index]
            found = False

            for _ in range(self.config.reject_num):
                if len(points) >= k:
                    break
                candidate = self._point_around(anchor, rng)
                if self._try_place(candidate, geometry, grid):
                    points.append(candidate)
                    active.append(candidate)
                    found = True

            if not found:
                active.pop(index)

            progress.iterations += 1
            progress.points_generated = len(points)
            progress.active_points = len(active)
            if self.config.verbose and progress.iterations % 50 == 0:
                print(progress)

        if self.config.verbose:
            print(f"Done! {progress}")

        return points

    def _seed_point(self, geometry: PolygonGeometry, rng: np.random.Generator) -> Point:
        """Bounding box centre, or a random box point if the centre is outside (holes, concavities)."""
        point = geometry.bounding_box.center
        while not geometry.contains_point(*point):
            x, y = geometry.random_box_points(rng, 1)[0]
            point = (int(x), int(y))
        return point

    def _point_around(self, anchor: Point, rng: np.random.Generator) -> Point:
        """
        Random point at distance [radius, 2 * radius) from ``anchor``.
        Distance is uniform, not area-uniform, so the inner part of the
        annulus is denser.
        """
        distance = rng.random() * self.radius + self.radius
        angle = 2 * math.pi * rng.random()
        return (int(anchor[0] + distance * math.sin(angle)),
                int(anchor[1] + distance * math.cos(angle)))

    def _try_place(self, candidate: Point, geometry: PolygonGeometry, grid: PoissonGrid) -> bool:
        if not geometry.contains_point(*candidate):
            return False
        if grid.has_conflict(candidate):
            return False
        grid.insert(candidate)
        return True


# =========================================================================
# Voronoi (K-means) Sampling
# =========================================================================

class VoronoiSampler(Sampler):
    """Approximates a centroidal Voronoi tessellation with Lloyd iterations.

    Clusters are index addressed: ``centers`` is a (k, 2) integer array and
    each auxiliary point carries the index of its nearest centre. Relaxation
    runs until no centre moves; there is no iteration cap.
    """

    method = SamplingMethod.VORONOI

    def generate_points(self, polygon: PolygonLike, k: int,
                        rng: Optional[np.random.Generator] = None) -> List[Point]:
        """Return the ``k`` relaxed centres in seed order."""
        geometry = self._as_geometry(polygon)
        rng = self._rng(rng)
        if k <= 0:
            return []

        aux = np.array(
            RandomSampler(self.config).generate_points(geometry, self.config.aux_points, rng),
            dtype=np.int64,
        )
        aux = self._sort_for_seeding(aux, geometry.bounding_box.width)
        centers = self._initial_centers(aux, k)
        iterations = self.relax(centers, aux)

        if self.config.verbose:
            progress = SamplingProgress(self.method, target=k, points_generated=k, iterations=iterations)
            print(f"Done! {progress}")

        return [(int(x), int(y)) for x, y in centers]

    @staticmethod
    def _sort_for_seeding(aux_points: np.ndarray, width: float) -> np.ndarray:
        """Row-major order (``width * y + x``), only used to spread the seeds."""
        keys = width * aux_points[:, 1] + aux_points[:, 0]
        return aux_points[np.argsort(keys, kind="stable")]

    @staticmethod
    def _initial_centers(aux_points: np.ndarray, k: int) -> np.ndarray:
        """Pick ``k`` evenly spaced entries of the sorted auxiliary points."""
        step = (len(aux_points) - 1) / (k - 1) if k > 1 else 0.0
        # round half up
        indices = [int(math.floor(i * step + 0.5)) for i in range(k)]
        return aux_points[indices].copy()

    @staticmethod
    def assign(centers: np.ndarray, aux_points: np.ndarray) -> np.ndarray:
        """Index of the nearest centre for every auxiliary point (first one on ties)."""
        distances = np.linalg.norm(
            aux_points[:, np.newaxis, :].astype(float) - centers[np.newaxis, :, :],
            axis=2,
        )
        return np.argmin(distances, axis=1)

    def kmeans_step(self, centers: np.ndarray, aux_points: np.ndarray) -> bool:
        """
        One Lloyd iteration. Moves ``centers`` in place to the truncated
        mean of their members and reports whether any centre moved.
        Centres without members stay where they are.
        """
        labels = self.assign(centers, aux_points)
        changed = False

        for index in range(len(centers)):
            members = aux_points[labels == index]
            if len(members) == 0:
                continue
            new_center = np.trunc(members.sum(axis=0) / len(members)).astype(centers.dtype)
            if not np.array_equal(new_center, centers[index]):
                centers[index] = new_center
                changed = True

        return changed

    def relax(self, centers: np.ndarray, aux_points: np.ndarray) -> int:
        """Iterate until a fixed point is reached, returning the iteration count."""
        iterations = 0
        while True:
            iterations += 1
            if not self.kmeans_step(centers, aux_points):
                return iterations
            if self.config.verbose and iterations % 10 == 0:
                print(f"[{self.method.value}] K-means iteration {iterations}")

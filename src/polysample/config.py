"""
Configuration and type definitions for polygon point sampling.
"""

import numpy as np
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple
from enum import Enum

# Type aliases
Polygon = np.ndarray
Point = Tuple[int, int]
GridKey = Tuple[int, int]

# Polygon shown when no coordinates are given
DEFAULT_X_COORDINATES = (150, 250, 325, 375, 450, 275, 100)
DEFAULT_Y_COORDINATES = (150, 100, 125, 225, 250, 375, 300)


def polygon_from_coordinates(xs: Sequence[float], ys: Sequence[float]) -> Polygon:
    """Zip separate x and y coordinate lists into an (n, 2) vertex array."""
    if len(xs) != len(ys):
        raise ValueError(f"got {len(xs)} x coordinates but {len(ys)} y coordinates")
    return np.column_stack([np.asarray(xs, dtype=float), np.asarray(ys, dtype=float)])


DEFAULT_POLYGON = polygon_from_coordinates(DEFAULT_X_COORDINATES, DEFAULT_Y_COORDINATES)


class SamplingMethod(Enum):
    """Available sampling strategies. Values double as export basenames."""
    RANDOM = "random"
    POISSON = "poisson"
    VORONOI = "voronoi"


@dataclass(frozen=True)
class SamplingConfig:
    """
    Configuration parameters shared by all samplers.

    Basic parameters:
        k: Number of points to generate
        radius: Minimum distance between Poisson-disk points, also the
            radius of the circle drawn around every point

    Algorithm tuning:
        reject_num: Placement attempts around an active point per visit
        aux_points: Auxiliary points used for the Voronoi relaxation
        sample_batch_size: Candidates drawn per rejection-sampling batch
        ray_cast_epsilon: Guards the even-odd test against horizontal edges

    Output:
        seed: Seed for the random generator (None draws fresh entropy)
        output_dir: Directory that SVG files are exported into
        verbose: Print progress while sampling
    """
    # Basic parameters
    k: int = 10
    radius: float = 25

    # Algorithm tuning
    reject_num: int = 30
    aux_points: int = 1000
    sample_batch_size: int = 50
    ray_cast_epsilon: float = 1e-10

    # Output
    seed: Optional[int] = None
    output_dir: str = "img"
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.k < 0:
            raise ValueError(f"k must be non-negative, got {self.k}")
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        for name in ("reject_num", "aux_points", "sample_batch_size"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")

    def replace(self, **changes) -> "SamplingConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


@dataclass
class SamplingProgress:
    """Tracks the current state of a sampling run."""
    method: SamplingMethod
    target: int
    points_generated: int = 0
    active_points: int = 0
    iterations: int = 0

    @property
    def progress_ratio(self) -> float:
        """Share of the requested points generated so far."""
        return self.points_generated / self.target if self.target > 0 else 1.0

    def __str__(self) -> str:
        return (f"[{self.method.value}] Generated: {self.points_generated}/{self.target} "
                f"({self.progress_ratio:.0%}) | Active: {self.active_points} | Iterations: {self.iterations}")

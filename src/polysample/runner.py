"""
Runs the three samplers side by side on one polygon.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional

from .config import Point, SamplingConfig, SamplingMethod
from .geometry import PolygonGeometry
from .samplers import PoissonDiskSampler, RandomSampler, Sampler, VoronoiSampler

# Display colour per method, shared by the renderer and the SVG writer
METHOD_COLORS = {
    SamplingMethod.RANDOM: "red",
    SamplingMethod.POISSON: "blue",
    SamplingMethod.VORONOI: "green",
}


@dataclass
class SamplingResult:
    """Points produced by one sampler plus how to display them."""
    method: SamplingMethod
    points: List[Point]
    color: str
    label: str

    @property
    def summary(self) -> str:
        return f"{self.label} - points generated: {len(self.points)}"


def build_samplers(config: SamplingConfig) -> List[Sampler]:
    """The three samplers in display order."""
    return [RandomSampler(config), PoissonDiskSampler(config), VoronoiSampler(config)]


def run_all(geometry: PolygonGeometry, config: SamplingConfig,
            rng: Optional[np.random.Generator] = None) -> List[SamplingResult]:
    """Sample ``config.k`` points with every method, sharing one generator."""
    rng = rng if rng is not None else np.random.default_rng(config.seed)
    results = []
    for sampler in build_samplers(config):
        points = sampler.generate_points(geometry, config.k, rng)
        results.append(SamplingResult(
            method=sampler.method,
            points=points,
            color=METHOD_COLORS[sampler.method],
            label=type(sampler).__name__,
        ))
        if config.verbose:
            print(results[-1].summary)
    return results

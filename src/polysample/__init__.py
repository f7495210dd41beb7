"""
polysample - Generate K points inside non-convex polygons.

Usage:
    import numpy as np
    from polysample import PolygonGeometry, SamplingConfig, PoissonDiskSampler, run_all, export_all

    geometry = PolygonGeometry.from_vertices([(0, 0), (100, 0), (100, 100), (0, 100)])
    rng = np.random.default_rng(0)

    # Single method
    config = SamplingConfig(k=5, radius=10)
    points = PoissonDiskSampler(config).generate_points(geometry, config.k, rng)

    # All three methods, then export
    results = run_all(geometry, config, rng)
    export_all(geometry, results, config)

Sampling methods:
    - Random: uniform rejection sampling, always exactly k points
    - Poisson disk: blue noise with a minimum spacing, may return fewer than k
    - Voronoi: K-means relaxation of 1000 random points towards a centroidal
      Voronoi tessellation
"""

from .config import (
    DEFAULT_POLYGON,
    Point,
    Polygon,
    SamplingConfig,
    SamplingMethod,
    SamplingProgress,
    polygon_from_coordinates,
)
from .geometry import BoundingBox, PoissonGrid, PolygonGeometry
from .samplers import PoissonDiskSampler, RandomSampler, Sampler, VoronoiSampler
from .runner import SamplingResult, run_all
from .export import export_all, export_svg, svg_document

__all__ = [
    "RandomSampler",
    "PoissonDiskSampler",
    "VoronoiSampler",
    "Sampler",
    "SamplingConfig",
    "SamplingMethod",
    "SamplingProgress",
    "SamplingResult",
    "PolygonGeometry",
    "PoissonGrid",
    "BoundingBox",
    "DEFAULT_POLYGON",
    "polygon_from_coordinates",
    "run_all",
    "export_all",
    "export_svg",
    "svg_document",
    "Point",
    "Polygon",
]

__version__ = "0.1.0"

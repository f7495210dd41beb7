"""
Command line entry point.

Usage:
  polysample -k 10 --radius 25 --seed 0 --export
  polysample --x 0,100,100,0 --y 0,0,100,100 -k 5 --radius 10 --no-show
"""

import argparse
from typing import List, Optional, Sequence

from .config import (
    DEFAULT_POLYGON,
    DEFAULT_X_COORDINATES,
    DEFAULT_Y_COORDINATES,
    Polygon,
    SamplingConfig,
    polygon_from_coordinates,
)
from .export import export_all
from .geometry import PolygonGeometry
from .runner import run_all


def _join(values: Sequence[float]) -> str:
    return ",".join(str(v) for v in values)


def build_parser() -> argparse.ArgumentParser:
    defaults = SamplingConfig()
    p = argparse.ArgumentParser(
        prog="polysample",
        description="Generate K points in a non-convex polygon with random, "
                    "Poisson-disk and Voronoi sampling.",
    )
    p.add_argument("--x", type=str, default=_join(DEFAULT_X_COORDINATES), help="polygon x coordinates, comma separated")
    p.add_argument("--y", type=str, default=_join(DEFAULT_Y_COORDINATES), help="polygon y coordinates, comma separated")
    p.add_argument("-k", type=int, default=defaults.k, help="points to generate")
    p.add_argument("--radius", type=float, default=defaults.radius, help="circle radius / Poisson-disk spacing")
    p.add_argument("--reject-num", type=int, default=defaults.reject_num, help="Poisson-disk attempts per active point")
    p.add_argument("--aux-points", type=int, default=defaults.aux_points, help="auxiliary points for Voronoi sampling")
    p.add_argument("--seed", type=int, default=None, help="random seed")
    p.add_argument("--export", action="store_true", help="export every result to SVG")
    p.add_argument("--output-dir", type=str, default=defaults.output_dir, help="SVG output directory")
    p.add_argument("--save", type=str, default=None, help="save the figure to this path")
    p.add_argument("--no-show", action="store_true", help="do not open a plot window")
    p.add_argument("--verbose", action="store_true", help="print progress")
    return p


def parse_polygon(x_text: str, y_text: str) -> Polygon:
    """Parse comma separated coordinates, falling back to the default polygon."""
    try:
        xs = [float(v) for v in x_text.split(",")]
        ys = [float(v) for v in y_text.split(",")]
        if len(xs) < 3:
            raise ValueError(f"need at least 3 vertices, got {len(xs)}")
        return polygon_from_coordinates(xs, ys)
    except ValueError:
        print("ERROR: Invalid polygon! Ignoring coordinate input.")
        return DEFAULT_POLYGON.copy()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = SamplingConfig(
            k=args.k,
            radius=args.radius,
            reject_num=args.reject_num,
            aux_points=args.aux_points,
            seed=args.seed,
            output_dir=args.output_dir,
            verbose=args.verbose,
        )
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 2

    geometry = PolygonGeometry.from_vertices(parse_polygon(args.x, args.y), config.ray_cast_epsilon)

    results = run_all(geometry, config)
    print("Points generated")
    for result in results:
        print(f"  {result.summary}")

    if args.export:
        export_all(geometry, results, config)

    if args.save is not None or not args.no_show:
        import matplotlib
        if args.no_show:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from .render import render_all
        render_all(geometry, results, config.radius, path=args.save)
        if not args.no_show:
            plt.show()

    return 0

"""
SVG export of sampling results.

One file per method, named ``{method}_{radius}_{k}_{count}.svg``. Circles
around the points are clipped to the polygon's bounding box.
"""

import svgwrite
from pathlib import Path
from typing import List, Optional, Union

from .config import SamplingConfig
from .geometry import PolygonGeometry
from .runner import SamplingResult


def _num(value: float) -> Union[int, float]:
    """Whole numbers as ints, everything else as an exact float."""
    value = float(value)
    return int(value) if value.is_integer() else value


def build_drawing(geometry: PolygonGeometry, result: SamplingResult, radius: float,
                  filename: Optional[str] = None) -> svgwrite.Drawing:
    """Polygon, bounding box, points and clipped radius circles as a drawing."""
    box = geometry.bounding_box
    x, y, w, h = _num(box.min_x), _num(box.min_y), _num(box.width), _num(box.height)
    r = _num(radius)
    color = result.color

    dwg = svgwrite.Drawing(filename or "noname.svg", size=(w, h))
    dwg.attribs["viewBox"] = f"{x} {y} {w} {h}"

    clip = dwg.clipPath(id="clip")
    clip.add(dwg.rect(insert=(x, y), size=(w, h)))
    dwg.defs.add(clip)

    for ring in geometry.polygons:
        dwg.add(dwg.polygon(
            points=[(_num(px), _num(py)) for px, py in ring],
            stroke="black",
            fill="none",
        ))

    dwg.add(dwg.rect(insert=(x, y), size=(w, h), stroke="black", fill="none"))

    for px, py in result.points:
        dwg.add(dwg.circle(center=(px, py), r=1, stroke=color, fill=color))
        dwg.add(dwg.circle(center=(px, py), r=r, stroke=color, fill="none", clip_path="url(#clip)"))

    return dwg


def svg_document(geometry: PolygonGeometry, result: SamplingResult, radius: float) -> str:
    return build_drawing(geometry, result, radius).tostring()


def export_filename(result: SamplingResult, config: SamplingConfig) -> str:
    return f"{result.method.value}_{_num(config.radius)}_{config.k}_{len(result.points)}.svg"


def export_svg(geometry: PolygonGeometry, result: SamplingResult, config: SamplingConfig) -> Path:
    """Write one result to ``config.output_dir`` and return the file path."""
    directory = Path(config.output_dir)
    if not directory.exists():
        directory.mkdir(parents=True)
        print(f"Created image output dir: {directory}")

    path = directory / export_filename(result, config)
    overwrite = " - overwritten" if path.exists() else ""
    build_drawing(geometry, result, config.radius, filename=str(path)).save()
    print(f"Exported SVG file: {path}{overwrite}")
    return path


def export_all(geometry: PolygonGeometry, results: List[SamplingResult],
               config: SamplingConfig) -> List[Path]:
    return [export_svg(geometry, result, config) for result in results]

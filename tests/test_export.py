import io
import tempfile
import unittest
import xml.etree.ElementTree as ET
from contextlib import redirect_stdout
from pathlib import Path

from polysample.config import SamplingConfig, SamplingMethod
from polysample.export import export_all, export_filename, export_svg, svg_document
from polysample.geometry import PolygonGeometry
from polysample.runner import SamplingResult

SVG = "{http://www.w3.org/2000/svg}"


def parse(text):
    return ET.fromstring(text)


def parse_points(text):
    return [tuple(float(v) for v in pair.split(",")) for pair in text.split()]


class TestSvgExport(unittest.TestCase):
    def setUp(self):
        self.geometry = PolygonGeometry.from_vertices([(0, 0), (100, 0), (100, 100), (0, 100)])
        self.result = SamplingResult(SamplingMethod.RANDOM, [(10, 20), (30, 40)], "red", "RandomSampler")
        self.tmp = tempfile.TemporaryDirectory()
        self.config = SamplingConfig(k=5, radius=10, output_dir=str(Path(self.tmp.name) / "img"))

    def tearDown(self):
        self.tmp.cleanup()

    def test_document_structure(self):
        root = parse(svg_document(self.geometry, self.result, 10))
        self.assertEqual(root.tag, SVG + "svg")
        self.assertEqual((root.get("width"), root.get("height")), ("100", "100"))
        self.assertEqual(root.get("viewBox"), "0 0 100 100")

        clip = root.find(f"{SVG}defs/{SVG}clipPath")
        self.assertEqual(clip.get("id"), "clip")
        clip_rect = clip.find(SVG + "rect")
        self.assertEqual([clip_rect.get(a) for a in ("x", "y", "width", "height")], ["0", "0", "100", "100"])

        polygon = root.find(SVG + "polygon")
        self.assertEqual(parse_points(polygon.get("points")), [(0, 0), (100, 0), (100, 100), (0, 100)])
        self.assertEqual((polygon.get("stroke"), polygon.get("fill")), ("black", "none"))

        box = root.find(SVG + "rect")
        self.assertEqual([box.get(a) for a in ("x", "y", "width", "height")], ["0", "0", "100", "100"])
        self.assertEqual(box.get("fill"), "none")

    def test_document_points(self):
        root = parse(svg_document(self.geometry, self.result, 10))
        circles = root.findall(SVG + "circle")
        self.assertEqual(len(circles), 4)

        dot, ring = circles[0], circles[1]
        self.assertEqual((dot.get("cx"), dot.get("cy"), dot.get("r")), ("10", "20", "1"))
        self.assertEqual((dot.get("stroke"), dot.get("fill")), ("red", "red"))
        self.assertEqual((ring.get("cx"), ring.get("cy"), ring.get("r")), ("10", "20", "10"))
        self.assertEqual(ring.get("fill"), "none")
        self.assertEqual(ring.get("clip-path"), "url(#clip)")
        self.assertEqual((circles[3].get("cx"), circles[3].get("cy")), ("30", "40"))

    def test_one_polygon_element_per_ring(self):
        geometry = PolygonGeometry([[(0, 0), (10, 0), (10, 10), (0, 10)], [(2, 2), (8, 2), (8, 8)]])
        root = parse(svg_document(geometry, self.result, 1))
        self.assertEqual(len(root.findall(SVG + "polygon")), 2)

    def test_large_coordinates_are_exact(self):
        """Bounds, radius and points agree digit for digit on big canvases."""
        size = 1234567
        geometry = PolygonGeometry.from_vertices([(0, 0), (size, 0), (size, size), (0, size)])
        result = SamplingResult(SamplingMethod.RANDOM, [(size - 1, 5)], "red", "RandomSampler")
        root = parse(svg_document(geometry, result, 12345.5))

        self.assertEqual(root.get("width"), "1234567")
        self.assertEqual(root.get("viewBox"), "0 0 1234567 1234567")
        self.assertEqual(parse_points(root.find(SVG + "polygon").get("points"))[2], (size, size))
        ring = root.findall(SVG + "circle")[1]
        self.assertEqual((ring.get("cx"), ring.get("r")), ("1234566", "12345.5"))

    def test_filename(self):
        self.assertEqual(export_filename(self.result, self.config), "random_10_5_2.svg")
        self.assertEqual(export_filename(self.result, self.config.replace(radius=2.5)), "random_2.5_5_2.svg")
        self.assertEqual(export_filename(self.result, self.config.replace(radius=25.0)), "random_25_5_2.svg")

    def test_export_creates_directory_and_reports_overwrite(self):
        out = io.StringIO()
        with redirect_stdout(out):
            path = export_svg(self.geometry, self.result, self.config)
            export_svg(self.geometry, self.result, self.config)

        self.assertTrue(path.exists())
        self.assertEqual(path.name, "random_10_5_2.svg")
        root = ET.parse(path).getroot()
        self.assertEqual(root.get("viewBox"), "0 0 100 100")
        self.assertEqual(len(root.findall(SVG + "circle")), 4)
        text = out.getvalue()
        self.assertIn("Created image output dir", text)
        self.assertIn("- overwritten", text)

    def test_export_all(self):
        results = [
            self.result,
            SamplingResult(SamplingMethod.POISSON, [(50, 50)], "blue", "PoissonDiskSampler"),
        ]
        with redirect_stdout(io.StringIO()):
            paths = export_all(self.geometry, results, self.config)
        self.assertEqual([p.name for p in paths], ["random_10_5_2.svg", "poisson_10_5_1.svg"])


if __name__ == '__main__':
    unittest.main()

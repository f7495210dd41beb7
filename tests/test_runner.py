import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from polysample.cli import main, parse_polygon
from polysample.config import DEFAULT_POLYGON, SamplingConfig, SamplingMethod
from polysample.geometry import PolygonGeometry
from polysample.render import render_all
from polysample.runner import run_all


class TestRunner(unittest.TestCase):
    def setUp(self):
        self.geometry = PolygonGeometry.from_vertices([(0, 0), (100, 0), (100, 100), (0, 100)])
        self.config = SamplingConfig(k=5, radius=10)

    def test_runs_every_method_in_order(self):
        results = run_all(self.geometry, self.config, np.random.default_rng(0))
        self.assertEqual([r.method for r in results],
                         [SamplingMethod.RANDOM, SamplingMethod.POISSON, SamplingMethod.VORONOI])
        self.assertEqual([r.color for r in results], ["red", "blue", "green"])
        self.assertEqual([r.label for r in results], ["RandomSampler", "PoissonDiskSampler", "VoronoiSampler"])
        self.assertEqual(len(results[0].points), 5)
        self.assertLessEqual(len(results[1].points), 5)
        self.assertEqual(len(results[2].points), 5)

    def test_summary(self):
        result = run_all(self.geometry, self.config, np.random.default_rng(0))[0]
        self.assertEqual(result.summary, "RandomSampler - points generated: 5")

    def test_seeded_config_is_reproducible(self):
        config = self.config.replace(seed=42)
        a = run_all(self.geometry, config)
        b = run_all(self.geometry, config)
        self.assertEqual([r.points for r in a], [r.points for r in b])


class TestRender(unittest.TestCase):
    def test_one_panel_per_result(self):
        geometry = PolygonGeometry.from_vertices(DEFAULT_POLYGON)
        results = run_all(geometry, SamplingConfig(k=5), np.random.default_rng(0))
        with tempfile.TemporaryDirectory() as tmp, redirect_stdout(io.StringIO()):
            path = Path(tmp) / "samples.png"
            fig = render_all(geometry, results, 25, path=str(path))
            self.assertTrue(path.exists())
        self.assertEqual(len(fig.axes), 3)
        self.assertEqual(fig.axes[1].get_title(), results[1].summary)
        plt.close(fig)


class TestCli(unittest.TestCase):
    def test_parse_polygon(self):
        polygon = parse_polygon("0,100,100,0", "0,0,100,100")
        np.testing.assert_array_equal(polygon, [[0, 0], [100, 0], [100, 100], [0, 100]])

    def test_invalid_polygon_falls_back_to_default(self):
        for xs, ys in (("0,100,100", "0,0"), ("a,b,c", "1,2,3"), ("0,1", "0,1")):
            out = io.StringIO()
            with redirect_stdout(out):
                polygon = parse_polygon(xs, ys)
            np.testing.assert_array_equal(polygon, DEFAULT_POLYGON)
            self.assertIn("ERROR: Invalid polygon! Ignoring coordinate input.", out.getvalue())

    def test_main_exports(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = io.StringIO()
            with redirect_stdout(out):
                code = main(["--x", "0,100,100,0", "--y", "0,0,100,100", "-k", "5", "--radius", "10",
                             "--seed", "3", "--export", "--output-dir", tmp, "--no-show"])
            self.assertEqual(code, 0)
            names = sorted(p.name for p in Path(tmp).glob("*.svg"))
            self.assertEqual(len(names), 3)
            self.assertIn("random_10_5_5.svg", names)
            self.assertIn("voronoi_10_5_5.svg", names)
            self.assertIn("Points generated", out.getvalue())

    def test_main_rejects_bad_config(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main(["--radius", "0", "--no-show"]), 2)


if __name__ == '__main__':
    unittest.main()

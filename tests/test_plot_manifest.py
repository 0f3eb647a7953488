from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from sfgraphing import PlottingType, build_data_sets, load_plot_manifest
from sfgraphing.cli import main, summarize


EXAMPLE_MANIFEST = Path(__file__).resolve().parents[1] / "examples" / "plots" / "wide_table.toml"


class PlotManifestTests(unittest.TestCase):
    def _write(self, root: Path, lines: list[str]) -> Path:
        path = root / "plot.toml"
        path.write_text("\n".join(lines))
        return path

    def test_manifest_applies_defaults_and_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(
                Path(td),
                [
                    "[defaults]",
                    'color = "red"',
                    'type = "line"',
                    "",
                    "[[dataset]]",
                    "x = [1, 2, 3]",
                    "y = [[10, 20], [11, 21], [12, 22]]",
                    'labels = ["a"]',
                    "",
                    "[[dataset]]",
                    "x = [0, 1]",
                    "y = [5, 6]",
                    "color = [1, 2, 3]",
                    'type = "bars"',
                ],
            )
            manifest = load_plot_manifest(path)
            self.assertEqual(len(manifest.entries), 2)
            self.assertEqual(manifest.entries[0].color, (255, 0, 0, 255))
            self.assertIs(manifest.entries[0].plotting_type, PlottingType.LINE)
            self.assertEqual(manifest.entries[1].color, (1, 2, 3, 255))
            self.assertIs(manifest.entries[1].plotting_type, PlottingType.BARS)

            data_sets = build_data_sets(manifest)
            self.assertEqual([ds.label for ds in data_sets], ["a", "", ""])
            self.assertEqual(list(data_sets[1]), [(1.0, 20.0), (2.0, 21.0), (3.0, 22.0)])
            self.assertEqual(list(data_sets[2]), [(0.0, 5.0), (1.0, 6.0)])

    def test_manifest_without_defaults_uses_builtin_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(Path(td), ["[[dataset]]", "x = [1]", "y = [2]"])
            manifest = load_plot_manifest(path)
            self.assertEqual(manifest.entries[0].color, (255, 255, 255, 255))
            self.assertIs(manifest.entries[0].plotting_type, PlottingType.POINTS)
            self.assertEqual(manifest.entries[0].labels, [])

    def test_missing_manifest_raises(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(FileNotFoundError):
                load_plot_manifest(Path(td) / "absent.toml")

    def test_invalid_manifest_fields_are_reported(self) -> None:
        cases = {
            "missing required field: y": ["[[dataset]]", "x = [1]"],
            "dataset[0].type": ["[[dataset]]", "x = [1]", "y = [1]", 'type = "area"'],
            "dataset[0].color": ["[[dataset]]", "x = [1]", "y = [1]", "color = [1, 2]"],
            "dataset[0].labels must contain only strings": ["[[dataset]]", "x = [1]", "y = [1]", "labels = [1]"],
            "defaults must be a table": ['defaults = "x"'],
        }
        for expected, lines in cases.items():
            with self.subTest(expected=expected):
                with tempfile.TemporaryDirectory() as td:
                    path = self._write(Path(td), lines)
                    with self.assertRaises(ValueError) as cm:
                        load_plot_manifest(path)
                    self.assertIn(expected, str(cm.exception))

    def test_example_manifest_builds(self) -> None:
        data_sets = build_data_sets(load_plot_manifest(EXAMPLE_MANIFEST))
        self.assertEqual([ds.label for ds in data_sets], ["probe-a", "probe-b", "left", "", "totals"])
        self.assertEqual(data_sets[4].color, (62, 149, 255, 255))


class CliTests(unittest.TestCase):
    def test_summary_prints_json(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main(["summary", str(EXAMPLE_MANIFEST), "--points"])
        self.assertEqual(code, 0)
        doc = json.loads(stdout.getvalue())
        self.assertEqual(doc["count"], 5)
        first = doc["series"][0]
        self.assertEqual(first["label"], "probe-a")
        self.assertEqual(first["type"], "line")
        self.assertEqual(first["color"], [0, 255, 255, 255])
        self.assertEqual(first["length"], 5)
        self.assertEqual(first["points"][0], [0.0, 20.5])

    def test_summary_reports_shape_errors(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "plot.toml"
            path.write_text("\n".join(["[[dataset]]", "x = []", "y = [[1, 2]]"]))
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr):
                code = main(["summary", str(path)])
        self.assertEqual(code, 2)
        self.assertIn("error: empty x value data", stderr.getvalue())

    def test_summarize_omits_points_by_default(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "plot.toml"
            path.write_text("\n".join(["[[dataset]]", "x = [1, 2]", "y = [3, 4]", 'labels = ["s"]']))
            doc = summarize(build_data_sets(load_plot_manifest(path)))
        self.assertEqual(doc, {"count": 1, "series": [{"label": "s", "type": "points", "color": [255, 255, 255, 255], "length": 2}]})


if __name__ == "__main__":
    unittest.main()

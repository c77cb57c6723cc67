"""Tests for one-call checking, the command line, and layer rendering."""

from __future__ import annotations

import contextlib
import io
import json
import subprocess
import sys
import tempfile
import textwrap
import unittest
from pathlib import Path

from parchmint.__main__ import main
from parchmint.errors import DocumentReadError
from parchmint.log import Log
from parchmint.render import GeometryCanvas, RenderConfig, render_layer
from parchmint.report import check_document, check_file
from tests.device_fixture import make_mixer_document

REPO_ROOT = Path(__file__).resolve().parent.parent


def _run_python(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run([sys.executable, *args], cwd=REPO_ROOT,
                          capture_output=True, text=True, timeout=60)


class TestCheckDocument(unittest.TestCase):

    def test_valid_fixture(self):
        report = check_document(make_mixer_document())
        self.assertTrue(report.valid)
        self.assertTrue(report.parser_valid)
        self.assertTrue(report.architecture_valid)
        self.assertEqual(report.log.errors, [])
        self.assertEqual(report.extent, (320, 70))

    def test_flags_are_independent(self):
        # A geometric problem the parser cannot see.
        doc = make_mixer_document()
        doc["x-span"] = 50
        report = check_document(doc)
        self.assertTrue(report.parser_valid)
        self.assertFalse(report.architecture_valid)
        self.assertFalse(report.valid)

        # A resolution problem: the architecture check fails independently too.
        doc = make_mixer_document()
        doc["connections"][1]["sinks"][0]["port"] = "nope"
        report = check_document(doc)
        self.assertFalse(report.parser_valid)
        self.assertFalse(report.architecture_valid)

    def test_shared_log(self):
        log = Log()
        doc = make_mixer_document()
        doc["connections"][0]["sinks"][0]["component"] = "ghost"
        report = check_document(doc, log)
        self.assertIs(report.log, log)
        texts = log.texts()
        parser_idx = next(i for i, t in enumerate(texts) if t.startswith("Parser:"))
        arch_idx = next(i for i, t in enumerate(texts) if t.startswith("Architecture:"))
        self.assertLess(parser_idx, arch_idx)

    def test_fatal_document(self):
        report = check_document("[]")
        self.assertIsNone(report.architecture)
        self.assertFalse(report.valid)
        self.assertEqual(len(report.log.errors), 1)

    def test_library_call_writes_nothing_to_console(self):
        script = textwrap.dedent("""
            from parchmint import check_document
            from tests.device_fixture import make_mixer_document

            doc = make_mixer_document()
            doc["connections"][0]["sinks"][0]["component"] = "ghost"
            report = check_document(doc)
            assert not report.valid
            assert report.log.errors
        """)
        result = _run_python("-c", script)
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertEqual(result.stdout, "")
        self.assertEqual(result.stderr, "")


class TestCheckFile(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, doc: dict) -> Path:
        path = self.dir / "device.json"
        path.write_text(json.dumps(doc), encoding="utf-8")
        return path

    def test_reads_file(self):
        report = check_file(self._write(make_mixer_document()))
        self.assertTrue(report.valid)

    def test_missing_file(self):
        with self.assertRaises(DocumentReadError):
            check_file(self.dir / "missing.json")

    def test_cli_valid(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["check", str(self._write(make_mixer_document()))])
        self.assertEqual(code, 0)
        self.assertIn("mixer_device: valid", out.getvalue())

    def test_cli_invalid_prints_log(self):
        doc = make_mixer_document()
        doc["components"][1]["ports"][0]["x"] = 50
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["check", str(self._write(doc))])
        self.assertEqual(code, 1)
        self.assertIn("[ERROR]", out.getvalue())
        self.assertIn("mixer_device: invalid", out.getvalue())

    def test_cli_prints_each_message_once(self):
        path = self.dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = _run_python("-m", "parchmint", "check", str(path))
        self.assertEqual(result.returncode, 1)
        self.assertEqual(result.stderr, "")
        self.assertEqual(result.stdout.count("not valid JSON"), 1)
        self.assertIn("[ERROR] Parser: Document is not valid JSON", result.stdout)

    def test_cli_verbose_routes_diagnostics_to_logging(self):
        path = self.dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = _run_python("-m", "parchmint", "check", str(path), "--verbose")
        self.assertEqual(result.returncode, 1)
        self.assertIn("ERROR parchmint.diagnostics: Parser: Document is not valid JSON",
                      result.stderr)

    def test_cli_unreadable(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = main(["check", str(self.dir / "missing.json")])
        self.assertEqual(code, 2)
        self.assertIn("Cannot read", err.getvalue())


class TestRender(unittest.TestCase):

    def setUp(self):
        report = check_document(make_mixer_document())
        self.arch = report.architecture
        self.layer = self.arch.layers[0]

    def test_draw_order(self):
        canvas = render_layer(self.layer, fallback=(self.arch.x_span, self.arch.y_span))
        self.assertEqual(canvas.kinds, ["line", "line", "box", "box", "box"])
        self.assertEqual((canvas.width, canvas.height), (400, 200))
        self.assertFalse(canvas.overflows())

    def test_config_is_explicit(self):
        config = RenderConfig(color="red", max_x=150, max_y=100)
        canvas = render_layer(self.layer, config)
        self.assertEqual((canvas.width, canvas.height), (150, 100))
        self.assertTrue(all(item.color == "red" for item in canvas.items))
        self.assertTrue(canvas.overflows())

    def test_default_color(self):
        canvas = render_layer(self.layer, fallback=(400, 200))
        self.assertTrue(all(item.color == "black" for item in canvas.items))

    def test_size_from_extent_with_margin(self):
        canvas = render_layer(self.layer, RenderConfig(margin=10), fallback=(320, 70))
        self.assertEqual((canvas.width, canvas.height), (330, 80))

    def test_footprint_includes_stroke_width(self):
        canvas = GeometryCanvas(width=400, height=200)
        self.layer.render(canvas)
        lines = [item for item in canvas.items if item.kind == "line"]
        # 80 long, 5 wide
        self.assertAlmostEqual(lines[0].area.area, 400.0)


if __name__ == "__main__":
    unittest.main()

"""Tests for field-level validation primitives and the diagnostics log."""

from __future__ import annotations

import logging
import unittest

from parchmint.log import Log, Message, Severity
from parchmint.model.validation import (
    CheckResult,
    DEFAULT_COORD_VALUE, DEFAULT_DIM_VALUE, DEFAULT_SPAN_VALUE, DEFAULT_STR_VALUE,
    check_coord_value, check_dimension_value, check_id_uniqueness,
    check_span_value, check_string_value, is_valid,
)
from parchmint.model import Layer


class TestStringCheck(unittest.TestCase):

    def test_valid(self):
        self.assertIs(check_string_value("mixer", "name", "Component"), CheckResult.VALID)

    def test_sentinel_is_default(self):
        log = Log()
        result = check_string_value(DEFAULT_STR_VALUE, "name", "Component", log)
        self.assertIs(result, CheckResult.DEFAULT)
        self.assertIn('Component: Field "name" is set to the default value.', log.texts())

    def test_empty_is_invalid(self):
        log = Log()
        self.assertIs(check_string_value("", "id", "Layer", log), CheckResult.INVALID)
        self.assertIn("cannot be empty", log.peek().text)

    def test_non_string_is_invalid(self):
        self.assertIs(check_string_value(None, "id", "Layer"), CheckResult.INVALID)
        self.assertIs(check_string_value(42, "id", "Layer"), CheckResult.INVALID)

    def test_valid_emits_nothing(self):
        log = Log()
        check_string_value("ok", "id", "Layer", log)
        self.assertEqual(len(log), 0)


class TestNumericChecks(unittest.TestCase):

    def test_span(self):
        self.assertIs(check_span_value(1, "xSpan", "C"), CheckResult.VALID)
        self.assertIs(check_span_value(DEFAULT_SPAN_VALUE, "xSpan", "C"), CheckResult.DEFAULT)
        self.assertIs(check_span_value(0, "xSpan", "C"), CheckResult.INVALID)
        self.assertIs(check_span_value(-5, "xSpan", "C"), CheckResult.INVALID)

    def test_coord(self):
        self.assertIs(check_coord_value(0, "x", "Coord"), CheckResult.VALID)
        self.assertIs(check_coord_value(DEFAULT_COORD_VALUE, "x", "Coord"), CheckResult.DEFAULT)
        self.assertIs(check_coord_value(-2, "x", "Coord"), CheckResult.INVALID)

    def test_spans_and_coords_must_be_whole(self):
        log = Log()
        self.assertIs(check_coord_value(20.5, "x", "Coord", log), CheckResult.INVALID)
        self.assertIs(check_span_value(2.25, "xSpan", "C", log), CheckResult.INVALID)
        self.assertEqual(log.texts(), [
            'Coord: Field "x" must be a whole number (got 20.5).',
            'C: Field "xSpan" must be a whole number (got 2.25).',
        ])
        self.assertIs(check_coord_value(20.0, "x", "Coord"), CheckResult.VALID)
        self.assertIs(check_span_value(3.0, "xSpan", "C"), CheckResult.VALID)

    def test_dimension_must_be_positive(self):
        self.assertIs(check_dimension_value(0.5, "depth", "F"), CheckResult.VALID)
        self.assertIs(check_dimension_value(DEFAULT_DIM_VALUE, "depth", "F"), CheckResult.DEFAULT)
        self.assertIs(check_dimension_value(0, "depth", "F"), CheckResult.INVALID)
        self.assertIs(check_dimension_value(-3, "depth", "F"), CheckResult.INVALID)

    def test_non_numbers_are_invalid(self):
        for value in (None, "10", True):
            self.assertIs(check_span_value(value, "xSpan", "C"), CheckResult.INVALID)

    def test_default_and_invalid_are_worded_differently(self):
        log = Log()
        check_span_value(DEFAULT_SPAN_VALUE, "xSpan", "Component", log)
        check_span_value(0, "xSpan", "Component", log)
        default_text, invalid_text = log.texts()
        self.assertIn("default", default_text)
        self.assertNotIn("default", invalid_text)
        self.assertIn("less than 1", invalid_text)

    def test_severity_is_forwarded(self):
        log = Log()
        check_span_value(DEFAULT_SPAN_VALUE, "xSpan", "Architecture", log, Severity.WARNING)
        self.assertIs(log.peek().severity, Severity.WARNING)

    def test_is_valid(self):
        self.assertTrue(is_valid(CheckResult.VALID))
        self.assertFalse(is_valid(CheckResult.INVALID))
        self.assertFalse(is_valid(CheckResult.DEFAULT))


class TestIdUniqueness(unittest.TestCase):

    def test_reports_every_pair(self):
        log = Log()
        layers = [Layer("a", "x"), Layer("b", "x"), Layer("c", "x"), Layer("d", "y")]
        self.assertFalse(check_id_uniqueness(layers, "layers", "Architecture", log))
        self.assertEqual(len(log.errors), 3)

    def test_unique(self):
        self.assertTrue(check_id_uniqueness([Layer("a", "1"), Layer("b", "2")], "layers", "A"))


class TestLog(unittest.TestCase):

    def test_message_format(self):
        msg = Message(Severity.ERROR, "bad layer", indent=1, extra_lines=["ID: l1", "Index: 0"])
        self.assertEqual(str(msg), "\t[ERROR] bad layer\n\t\tID: l1\n\t\tIndex: 0\n")

    def test_other_uses_type_text(self):
        msg = Message(Severity.OTHER, "parsed", type_text="INFO")
        self.assertEqual(str(msg), "[INFO] parsed\n")

    def test_notify_keeps_order(self):
        log = Log()
        log.error("first")
        log.warning("second")
        log.notify(Severity.OTHER, "third", "detail", type_text="NOTE")
        self.assertEqual(log.texts(), ["first", "second", "third"])
        self.assertEqual(log.size(), 3)
        self.assertEqual(log.peek().extra_lines, ["detail"])
        self.assertEqual(str(log), "[ERROR] first\n[WARNING] second\n[NOTE] third\n\tdetail\n")

    def test_errors_and_warnings(self):
        log = Log()
        log.error("e")
        log.warning("w")
        self.assertEqual([m.text for m in log.errors], ["e"])
        self.assertEqual([m.text for m in log.warnings], ["w"])

    def test_clear_and_peek_empty(self):
        log = Log()
        log.error("x")
        log.clear()
        self.assertEqual(len(log), 0)
        self.assertIsNone(log.peek())

    def test_rejects_unknown_severity(self):
        with self.assertRaises(TypeError):
            Log().notify("ERROR", "not a Severity")

    def test_forwards_to_logging(self):
        with self.assertLogs("parchmint.diagnostics", level=logging.WARNING) as captured:
            log = Log()
            log.warning("watch out")
            log.error("broken")
        self.assertEqual(len(captured.records), 2)
        self.assertEqual(captured.records[1].levelno, logging.ERROR)


if __name__ == "__main__":
    unittest.main()

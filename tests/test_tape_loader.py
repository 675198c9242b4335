"""Tests for the tape layout loader.

Uses the reel fixture plus small inline layouts.

Validates:
  - Board origin, tape properties and aliased keys are parsed
  - Aliased keys share one Tape object
  - Every malformed directive fails the whole load (config is None)
  - Unknown directives and comments are ignored
  - Serialization lists aliases under their tape
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from picknplace.tapes import (
    Position, load_tape_config, parse_tape_config, tape_config_to_dict,
)
from tests.reel_fixture import REEL_LAYOUT, make_reel_config


class TestValidLayout(unittest.TestCase):

    def setUp(self):
        self.config = make_reel_config()

    def test_board_origin(self):
        self.assertEqual(self.config.board_origin, Position(100.0, 50.0))

    def test_tape_properties(self):
        tape = self.config.tape_for("C0603", "100n")
        self.assertIsNotNone(tape)
        self.assertEqual(tape.origin, Position(10.0, 40.0, 5.0))
        self.assertEqual(tape.spacing, (4.0, 0.0))
        self.assertEqual(tape.angle, 90.0)
        self.assertEqual(tape.count, 3)
        self.assertEqual(tape.cursor, 0)

    def test_aliases_share_tape(self):
        """Two keys on one Tape: line point at the same object."""
        a = self.config.tape_for_component["R0805@10k"]
        b = self.config.tape_for_component["R0805@22k"]
        self.assertIs(a, b)
        self.assertEqual(len(self.config.tapes), 3)

    def test_default_board_origin(self):
        result = parse_tape_config("Tape: X@1\norigin: 0 0 0\nspacing: 1 0\ncount: 1\n")
        self.assertTrue(result.ok)
        self.assertEqual(result.config.board_origin, Position(0.0, 0.0))

    def test_angle_is_its_own_directive(self):
        result = parse_tape_config("Tape: X@1\nspacing: 2 0\nangle: 45\n")
        self.assertTrue(result.ok)
        tape = result.config.tape_for_component["X@1"]
        self.assertEqual(tape.angle, 45.0)
        self.assertEqual(tape.spacing, (2.0, 0.0))

    def test_comments_blank_and_unknown_ignored(self):
        text = "\n# comment\n   \nFeeder: 3\nTape: X@1\n  # indented comment\nspacing: 1 0\n"
        with self.assertLogs("picknplace.tapes.loader", level="WARNING") as logs:
            result = parse_tape_config(text)
        self.assertTrue(result.ok)
        self.assertIn("Feeder:", logs.output[0])

    def test_trailing_comment_after_fields(self):
        result = parse_tape_config("Tape: X@1\ncount: 4 # full reel\nspacing: 2 0\n")
        self.assertTrue(result.ok)
        self.assertEqual(result.config.tape_for_component["X@1"].count, 4)

    def test_board_closes_tape_block(self):
        """origin: after Board: sets the board, not the tape."""
        text = "Tape: X@1\norigin: 1 2 3\nspacing: 1 0\nBoard:\norigin: 7 8\n"
        result = parse_tape_config(text)
        self.assertTrue(result.ok)
        self.assertEqual(result.config.board_origin, Position(7.0, 8.0))
        self.assertEqual(result.config.tape_for_component["X@1"].origin, Position(1, 2, 3))

    def test_rebound_key_uses_later_tape(self):
        text = "Tape: X@1\nspacing: 1 0\ncount: 1\nTape: X@1\nspacing: 2 0\ncount: 5\n"
        with self.assertLogs("picknplace.tapes.loader", level="WARNING"):
            result = parse_tape_config(text)
        self.assertTrue(result.ok)
        self.assertEqual(result.config.tape_for_component["X@1"].count, 5)


class TestLayoutErrors(unittest.TestCase):

    def _fails(self, text: str, fragment: str):
        result = parse_tape_config(text, source="t.cfg")
        self.assertFalse(result.ok)
        self.assertIsNone(result.config)
        self.assertTrue(
            any(fragment in str(e) for e in result.errors),
            f"{fragment!r} not in {[str(e) for e in result.errors]}",
        )
        return result

    def test_zero_spacing_fails_whole_load(self):
        text = "Tape: X@1\nspacing: 0 0\ncount: 1\nTape: Y@2\nspacing: 1 0\ncount: 3\n"
        result = self._fails(text, "spacing")
        self.assertEqual(result.errors[0].line_no, 2)
        self.assertEqual(result.errors[0].line, "spacing: 0 0")

    def test_property_before_tape(self):
        self._fails("spacing: 1 0\n", "spacing: without tape")
        self._fails("angle: 90\n", "angle: without tape")
        self._fails("count: 3\n", "count: without tape")

    def test_property_after_board(self):
        self._fails("Tape: X@1\nspacing: 1 0\nBoard:\ncount: 3\n", "count: without tape")

    def test_wrong_field_counts(self):
        self._fails("Tape: X@1\norigin: 1 2\n", "tape origin")
        self._fails("origin: 1 2 3\n", "board origin")
        self._fails("Tape: X@1\nspacing: 1\n", "spacing")
        self._fails("Tape: X@1\nangle:\n", "angle")
        self._fails("Tape: X@1\ncount: 1 2\n", "count")

    def test_non_numeric_fields(self):
        self._fails("Tape: X@1\norigin: a b c\n", "tape origin")
        self._fails("Tape: X@1\nspacing: 1 0\ncount: 2.5\n", "count")
        self._fails("Tape: X@1\nangle: nan\n", "angle: 'nan' is not a number")
        self._fails("Tape: X@1\nangle: 1e999\n", "finite")

    def test_field_error_names_directive_context(self):
        """A bad number says whether the tape or the board origin failed."""
        self._fails("Tape: X@1\norigin: a b c\n", "tape origin: 'a' is not a number")
        self._fails("origin: 1 zz\n", "board origin: 'zz' is not a number")
        self._fails("Tape: X@1\nspacing: 1 0\ncount: 2.5\n", "count: '2.5' is not an integer")

    def test_only_plain_decimal_numerals(self):
        self._fails("Tape: X@1\nspacing: 1_000 0\n", "'1_000' is not a number")
        self._fails("Tape: X@1\nspacing: 1 0\ncount: 1_0\n", "'1_0' is not an integer")
        self._fails("Tape: X@1\nspacing: 1 0\ncount: ٣\n", "is not an integer")
        self._fails("Tape: X@1\nangle: ١٢\n", "is not a number")

    def test_signed_and_exponent_numerals(self):
        result = parse_tape_config("Tape: X@1\norigin: -1.5 +2 .5\nspacing: 1e1 0.\ncount: +3\n")
        self.assertTrue(result.ok, result.errors)
        tape = result.config.tape_for_component["X@1"]
        self.assertEqual(tape.origin, Position(-1.5, 2.0, 0.5))
        self.assertEqual(tape.spacing, (10.0, 0.0))
        self.assertEqual(tape.count, 3)

    def test_negative_count(self):
        self._fails("Tape: X@1\nspacing: 1 0\ncount: -1\n", "count")

    def test_tape_without_names(self):
        self._fails("Tape:\nspacing: 1 0\n", "at least one component name")

    def test_tape_without_spacing(self):
        result = self._fails("Tape: X@1\ncount: 3\n", "no spacing")
        self.assertEqual(result.errors[0].line_no, 1)

    def test_all_errors_reported(self):
        result = parse_tape_config("spacing: 1 0\nTape: X@1\nspacing: 0 0\ncount: x\n")
        self.assertEqual([e.line_no for e in result.errors], [1, 3, 4])

    def test_missing_file(self):
        result = load_tape_config("/nonexistent/tapes.cfg")
        self.assertFalse(result.ok)
        self.assertIn("Read error", str(result.errors[0]))


class TestLoadFile(unittest.TestCase):

    def test_load_from_disk(self):
        with tempfile.TemporaryDirectory() as d:
            path = Path(d) / "tapes.cfg"
            path.write_text(REEL_LAYOUT, encoding="utf-8")
            result = load_tape_config(path)
        self.assertTrue(result.ok)
        self.assertIn("SOT-23@BC847", result.config.tape_for_component)


class TestSerialization(unittest.TestCase):

    def test_dump(self):
        data = tape_config_to_dict(make_reel_config())
        self.assertEqual(data["board_origin"], [100.0, 50.0])
        self.assertEqual(len(data["tapes"]), 3)
        self.assertEqual(data["tapes"][0]["components"], ["R0805@10k", "R0805@22k"])
        self.assertEqual(data["tapes"][0]["count"], 2)
        self.assertEqual(data["tapes"][0]["used"], 0)


if __name__ == "__main__":
    unittest.main()

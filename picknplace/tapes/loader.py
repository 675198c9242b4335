"""Tape layout loader — parses the line-oriented reel description.

Example::

    # Where the board sits on the bed.
    Board:
    origin: 100 50

    Tape: 0805@10k 0805@22k
    origin: 10 20 5
    spacing: 4 0
    angle: 90
    count: 25

Each line starts with a directive keyword; the rest of the line holds its
fields.  ``spacing:``, ``angle:`` and ``count:`` apply to the tape opened
by the most recent ``Tape:``; ``origin:`` sets the board origin outside a
tape block and the first slot inside one.  ``Board:`` closes the open tape.

Loading is all-or-nothing: the whole file is checked so every problem is
reported, but any error means no configuration is returned.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path

from picknplace.errors import ConfigParseError
from .models import Position, Tape, TapeConfig, TapeConfigResult

log = logging.getLogger("picknplace.tapes.loader")

# Plain decimal numerals only; no "1_000", no non-ASCII digits.
_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\Z", re.ASCII)
_INT_RE = re.compile(r"[+-]?\d+\Z", re.ASCII)


# ── Field parsing ──────────────────────────────────────────────────

def _fields(rest: str) -> list[str]:
    """Split the directive arguments, dropping a trailing ``# comment``."""
    out: list[str] = []
    for tok in rest.split():
        if tok.startswith("#"):
            break
        out.append(tok)
    return out


def _floats(fields: list[str], n: int, what: str) -> tuple[float, ...]:
    if len(fields) != n:
        raise ValueError(f"{what} needs {n} number(s), got {len(fields)}")
    values: list[float] = []
    for f in fields:
        if not _FLOAT_RE.match(f):
            raise ValueError(f"{what}: '{f}' is not a number")
        values.append(float(f))
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"{what} must be finite")
    return tuple(values)


def _int(fields: list[str], what: str) -> int:
    if len(fields) != 1:
        raise ValueError(f"{what} needs 1 integer, got {len(fields)} fields")
    if not _INT_RE.match(fields[0]):
        raise ValueError(f"{what}: '{fields[0]}' is not an integer")
    return int(fields[0])


# ── Parsing ────────────────────────────────────────────────────────

class _LayoutParser:
    """Walks the layout lines, tracking the currently open tape."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.config = TapeConfig()
        self.errors: list[ConfigParseError] = []
        self.current: Tape | None = None
        self._opened_at: tuple[int, str] = (0, "")

    def fail(self, line_no: int, line: str, reason: str) -> None:
        self.errors.append(ConfigParseError(self.source, line_no, line, reason))

    def close_tape(self) -> None:
        tape = self.current
        self.current = None
        if tape is None:
            return
        if tape.count > 1 and not tape.has_spacing:
            line_no, line = self._opened_at
            self.fail(line_no, line, f"Tape with {tape.count} components has no spacing")

    def open_tape(self, line_no: int, line: str, names: list[str]) -> None:
        self.close_tape()
        tape = Tape()
        self.current = tape
        self._opened_at = (line_no, line)
        if not names:
            # Still open the block so its properties are not reported as
            # orphans.
            self.fail(line_no, line, "Tape: needs at least one component name")
            return
        self.config.tapes.append(tape)
        # One reel may serve several footprint/value names.
        for name in names:
            previous = self.config.tape_for_component.get(name)
            if previous is not None and previous is not tape:
                log.warning("%s:%d: '%s' already has a tape; using the later one",
                            self.source, line_no, name)
            self.config.tape_for_component[name] = tape

    def feed(self, line_no: int, raw: str) -> None:
        line = raw.strip()
        if not line or line.startswith("#"):
            return

        parts = line.split(None, 1)
        directive = parts[0]
        fields = _fields(parts[1] if len(parts) > 1 else "")

        if directive == "Board:":
            self.close_tape()
            return
        if directive == "Tape:":
            self.open_tape(line_no, line, fields)
            return

        try:
            if directive == "origin:":
                if self.current is not None:
                    x, y, z = _floats(fields, 3, "tape origin")
                    self.current.set_first_component_position(x, y, z)
                else:
                    x, y = _floats(fields, 2, "board origin")
                    self.config.board_origin = Position(x, y)
            elif directive in ("spacing:", "angle:", "count:"):
                tape = self.current
                if tape is None:
                    self.fail(line_no, line, f"{directive} without tape")
                    return
                if directive == "spacing:":
                    dx, dy = _floats(fields, 2, "spacing")
                    tape.set_component_spacing(dx, dy)
                elif directive == "angle:":
                    (deg,) = _floats(fields, 1, "angle")
                    tape.set_angle(deg)
                else:
                    tape.set_number_components(_int(fields, "count"))
            else:
                log.warning("%s:%d: ignoring unknown directive '%s'",
                            self.source, line_no, directive)
        except ValueError as exc:
            self.fail(line_no, line, f"Parse problem {directive.rstrip(':')}: {exc}")

    def finish(self) -> TapeConfigResult:
        self.close_tape()
        if self.errors:
            return TapeConfigResult(config=None, errors=self.errors)
        return TapeConfigResult(config=self.config, errors=[])


# ── Public API ─────────────────────────────────────────────────────

def parse_tape_config(text: str, source: str = "<string>") -> TapeConfigResult:
    """Parse layout text into a TapeConfig.

    Returns a TapeConfigResult; ``result.config`` is None whenever any
    line failed, so a partial layout is never used.
    """
    parser = _LayoutParser(source)
    for line_no, raw in enumerate(text.splitlines(), start=1):
        parser.feed(line_no, raw)
    result = parser.finish()

    if result.ok:
        log.debug("Loaded %d tapes for %d component keys from %s",
                  len(result.config.tapes), len(result.config.tape_for_component), source)
    return result


def load_tape_config(path: Path | str) -> TapeConfigResult:
    """Read and parse a layout file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        err = ConfigParseError(str(path), 0, "", f"Read error: {exc}")
        return TapeConfigResult(config=None, errors=[err])
    return parse_tape_config(text, source=str(path))

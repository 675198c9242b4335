"""Part list readers — KiCad position CSV and ASCII .pos, Eagle .mnt, JSON."""

from __future__ import annotations

import csv
import io
import math
import sys
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from picknplace.errors import PartListError
from picknplace.tapes.models import Position
from .models import Part


FORMATS = ("kicad", "kicad-pos", "eagle", "json")

_EXTENSIONS = {
    ".csv": "kicad",
    ".pos": "kicad-pos",
    ".mnt": "eagle",
    ".mnb": "eagle",
    ".json": "json",
}


def _number(text: str, row: int, column: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise PartListError(row, f"{column} is not a number: '{text}'") from None
    if not math.isfinite(value):
        raise PartListError(row, f"{column} must be finite: '{text}'")
    return value


# ── KiCad ──────────────────────────────────────────────────────────

def read_kicad_pos(text: str) -> list[Part]:
    """Parse a KiCad position CSV (``Ref,Val,Package,PosX,PosY,Rot,Side``).

    The first row is the header.  Blank rows are skipped.
    """
    parts: list[Part] = []
    reader = csv.reader(io.StringIO(text))
    next(reader, None)  # header row
    for row_no, row in enumerate(reader, start=2):
        if not row or not any(cell.strip() for cell in row):
            continue
        if len(row) < 6:
            raise PartListError(row_no, f"expected at least 6 columns, got {len(row)}")
        ref, val, package, pos_x, pos_y, rot = (cell.strip() for cell in row[:6])
        parts.append(Part(
            component_name=ref,
            footprint=package,
            value=val,
            pos=Position(_number(pos_x, row_no, "PosX"), _number(pos_y, row_no, "PosY")),
            angle=_number(rot, row_no, "Rot"),
        ))
    return parts


def read_kicad_ascii_pos(text: str) -> list[Part]:
    """Parse a KiCad ASCII ``.pos`` file.

    Whitespace-separated ``Ref Val Package PosX PosY Rot Side`` rows;
    ``#`` and ``##`` lines are headers and comments.
    """
    parts: list[Part] = []
    for row_no, line in enumerate(text.splitlines(), start=1):
        row = line.split()
        if not row or row[0].startswith("#"):
            continue
        if len(row) < 6:
            raise PartListError(row_no, f"expected at least 6 columns, got {len(row)}")
        ref, val, package, pos_x, pos_y, rot = row[:6]
        parts.append(Part(
            component_name=ref,
            footprint=package,
            value=val,
            pos=Position(_number(pos_x, row_no, "PosX"), _number(pos_y, row_no, "PosY")),
            angle=_number(rot, row_no, "Rot"),
        ))
    return parts


# ── Eagle ──────────────────────────────────────────────────────────

def read_eagle_mnt(text: str) -> list[Part]:
    """Parse an Eagle ``.mnt`` file: ``name x y angle value package``.

    Parts without a value in Eagle export only five columns; they get the
    value ``"None"``.
    """
    parts: list[Part] = []
    for row_no, line in enumerate(text.splitlines(), start=1):
        row = line.split()
        if not row:
            continue
        if len(row) == 5:
            row.insert(4, "None")
        if len(row) < 6:
            raise PartListError(row_no, f"expected 6 columns, got {len(row)}")
        name, x, y, angle, value, package = row[:6]
        parts.append(Part(
            component_name=name,
            footprint=package,
            value=value,
            pos=Position(_number(x, row_no, "x"), _number(y, row_no, "y")),
            angle=_number(angle, row_no, "angle"),
        ))
    return parts


# ── JSON ───────────────────────────────────────────────────────────

class _PartRecord(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    footprint: str
    value: str
    x: float
    y: float
    angle: float = 0.0


_RECORDS = TypeAdapter(list[_PartRecord])


def read_json_parts(text: str) -> list[Part]:
    """Parse a JSON array of ``{name, footprint, value, x, y, angle}``."""
    try:
        records = _RECORDS.validate_json(text)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc", ())
        row = loc[0] + 1 if loc and isinstance(loc[0], int) else 0
        raise PartListError(row, first.get("msg", str(exc))) from exc
    return [
        Part(
            component_name=r.name,
            footprint=r.footprint,
            value=r.value,
            pos=Position(r.x, r.y),
            angle=r.angle,
        )
        for r in records
    ]


_READERS = {
    "kicad": read_kicad_pos,
    "kicad-pos": read_kicad_ascii_pos,
    "eagle": read_eagle_mnt,
    "json": read_json_parts,
}


# ── Public API ─────────────────────────────────────────────────────

def detect_format(path: Path | str) -> str:
    """Guess the part list format from the file extension (kicad if unknown)."""
    return _EXTENSIONS.get(Path(path).suffix.lower(), "kicad")


def read_parts(source: Path | str | TextIO | None = None, fmt: str = "auto") -> list[Part]:
    """Read a part list from a path, an open stream, or stdin (``None``/``"-"``).

    ``fmt`` is one of FORMATS or ``"auto"``; auto-detection needs a path
    and falls back to kicad for streams.
    """
    if source is None or source == "-":
        source = sys.stdin

    try:
        if isinstance(source, (str, Path)):
            if fmt == "auto":
                fmt = detect_format(source)
            text = Path(source).read_text(encoding="utf-8")
        else:
            if fmt == "auto":
                fmt = "kicad"
            text = source.read()
    except UnicodeDecodeError as exc:
        raise PartListError(0, f"not valid UTF-8 text: {exc}") from exc

    if fmt not in _READERS:
        raise ValueError(f"Unknown part list format '{fmt}', expected one of {FORMATS}")
    return _READERS[fmt](text)

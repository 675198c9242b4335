"""Part dataclass — one placement request from the board's part list."""

from __future__ import annotations

from dataclasses import dataclass

from picknplace.tapes.models import Position, component_key


@dataclass
class Part:
    component_name: str                 # reference designator, e.g. "R12"
    footprint: str
    value: str
    pos: Position                       # board-relative, mm
    angle: float = 0.0                  # board-relative, degrees

    @property
    def key(self) -> str:
        return component_key(self.footprint, self.value)

"""Streams G-code blocks for resolved placements to a text stream."""

from __future__ import annotations

import logging
from typing import TextIO

from picknplace.config import DEFAULT_MACHINE, MachineConfig
from picknplace.placement.models import ResolvedPlacement
from .templates import FINISH, PREAMBLE, pick_lines, place_lines

log = logging.getLogger("picknplace.gcode.emitter")


class GcodeEmitter:
    """Writes the preamble once, a pick/place pair per part, then the end.

    Output is written as soon as each placement arrives so long part lists
    stream without buffering.
    """

    def __init__(self, out: TextIO, machine: MachineConfig = DEFAULT_MACHINE) -> None:
        self.out = out
        self.machine = machine
        self.emitted = 0

    def _write(self, lines: list[str]) -> None:
        self.out.write("\n".join(lines) + "\n")

    def begin(self) -> None:
        self._write(PREAMBLE)

    def emit(self, placement: ResolvedPlacement) -> None:
        name = placement.label
        self._write(pick_lines(name, placement.pickup))
        self._write(place_lines(name, placement.place, self.machine.release_dwell_ms))
        self.emitted += 1
        log.debug("Emitted %s from slot %d", name, placement.slot)

    def finish(self) -> None:
        self._write(FINISH)

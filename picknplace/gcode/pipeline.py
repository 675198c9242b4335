"""
G-code pipeline orchestrator — runs the full parts → G-code pass.

This is the single entry point the CLI calls.  It:

1. Writes the preamble
2. Resolves each part against its tape, in input order
3. Writes a pick and a place block per resolved part
4. Reports parts that had no tape or whose tape ran out, and keeps going
5. Writes the closing command and returns a summary
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, TextIO

from picknplace.config import DEFAULT_MACHINE, MachineConfig
from picknplace.errors import PlacementError
from picknplace.parts.models import Part
from picknplace.placement.engine import place_parts
from picknplace.placement.models import ResolvedPlacement
from picknplace.tapes.models import TapeConfig
from .emitter import GcodeEmitter

log = logging.getLogger("picknplace.gcode.pipeline")


@dataclass
class GcodePipelineResult:
    """Summary of one G-code run."""

    placed: list[ResolvedPlacement] = field(default_factory=list)
    skipped: list[PlacementError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.skipped


def run_gcode_pipeline(
    config: TapeConfig,
    parts: Iterable[Part],
    out: TextIO,
    *,
    machine: MachineConfig = DEFAULT_MACHINE,
) -> GcodePipelineResult:
    """Write G-code for *parts* to *out*.

    Parameters
    ----------
    config : TapeConfig
        Parsed tape layout.  Its tape cursors advance as parts are placed.
    parts : Iterable[Part]
        Placement requests; order decides which slot each part gets.
    out : TextIO
        Destination for the G-code text.
    machine : MachineConfig
        Head geometry (hover height, release offset, rotation scale).

    Returns
    -------
    GcodePipelineResult
    """
    result = GcodePipelineResult()
    emitter = GcodeEmitter(out, machine)

    emitter.begin()
    for item in place_parts(config, parts, machine):
        if isinstance(item, PlacementError):
            result.skipped.append(item)
            continue
        emitter.emit(item)
        result.placed.append(item)
    emitter.finish()

    log.info("Placed %d parts, skipped %d", len(result.placed), len(result.skipped))
    for tape in config.tapes:
        if tape.count and tape.remaining == 0:
            log.info("Tape %s is empty", ", ".join(config.keys_for(tape)))
    return result

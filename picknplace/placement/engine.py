"""Placement engine — match parts to tape slots and compute both frames.

For every part:

1. Build the identity key ``footprint@value`` and look up its tape.
2. Take the tape's next slot; this is the only state change.
3. Pickup frame: the slot position, rotated to the reel's own angle.
4. Place frame: the part position shifted by the board origin, rotated by
   the difference between the part angle and the reel angle.

Both heights derive from the slot z: the board is assumed to sit at a
fixed offset (``MachineConfig.placement_offset_mm``) from the tape surface.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from picknplace.config import DEFAULT_MACHINE, MachineConfig
from picknplace.errors import NoTapeForComponent, PlacementError, TapeExhausted
from picknplace.parts.models import Part
from picknplace.tapes.models import TapeConfig, component_key
from .models import Frame, ResolvedPlacement

log = logging.getLogger("picknplace.placement.engine")


def normalize_angle(deg: float) -> float:
    """Map any angle (degrees) into [0, 360)."""
    a = deg % 360.0
    # A tiny negative input rounds up to exactly 360.0.
    if a >= 360.0:
        a = 0.0
    return a


def resolve_placement(
    config: TapeConfig,
    part: Part,
    machine: MachineConfig = DEFAULT_MACHINE,
) -> ResolvedPlacement:
    """Consume one slot for *part* and compute its pickup and place frames.

    Raises
    ------
    NoTapeForComponent
        No tape is registered for the part's key.  No tape is touched.
    TapeExhausted
        The tape has no slots left.
    """
    key = component_key(part.footprint, part.value)
    tape = config.tape_for_component.get(key)
    if tape is None:
        raise NoTapeForComponent(key)

    slot = tape.cursor
    try:
        pos = tape.next_position()
    except TapeExhausted as exc:
        raise TapeExhausted(key, exc.count) from exc

    z_travel = pos.z + machine.hover_clearance_mm

    pick_angle = normalize_angle(tape.angle)
    pickup = Frame(
        x=pos.x,
        y=pos.y,
        z_travel=z_travel,
        z_down=pos.z,
        angle_deg=pick_angle,
        rotation=machine.to_rotation(pick_angle),
    )

    # Board frame is a pure translation of machine space.
    place_angle = normalize_angle(part.angle - tape.angle + 360)
    place = Frame(
        x=part.pos.x + config.board_origin.x,
        y=part.pos.y + config.board_origin.y,
        z_travel=z_travel,
        z_down=pos.z + machine.placement_offset_mm,
        angle_deg=place_angle,
        rotation=machine.to_rotation(place_angle),
    )

    return ResolvedPlacement(part=part, key=key, slot=slot, pickup=pickup, place=place)


def place_parts(
    config: TapeConfig,
    parts: Iterable[Part],
    machine: MachineConfig = DEFAULT_MACHINE,
) -> Iterator[ResolvedPlacement | PlacementError]:
    """Resolve *parts* strictly in input order.

    Yields a ResolvedPlacement per part, or the PlacementError that
    prevented it; a failed part never stops the ones after it.
    """
    for part in parts:
        try:
            yield resolve_placement(config, part, machine)
        except PlacementError as exc:
            log.error("%s", exc)
            yield exc

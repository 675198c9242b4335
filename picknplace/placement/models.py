"""Placement output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from picknplace.parts.models import Part


@dataclass(frozen=True)
class Frame:
    """Absolute machine coordinates for one end of a pick-and-place move."""

    x: float
    y: float
    z_travel: float     # hover height for the horizontal move
    z_down: float       # nozzle height at the pick/release point
    angle_deg: float    # normalized, [0, 360)
    rotation: float     # angle_deg in actuator units


@dataclass
class ResolvedPlacement:
    """A part matched to a tape slot, with pickup and placement frames."""

    part: Part
    key: str
    slot: int
    pickup: Frame
    place: Frame

    @property
    def label(self) -> str:
        return f"{self.part.component_name} ({self.key})"

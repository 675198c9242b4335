"""Machine geometry shared by the placement engine and the G-code emitter.

These values describe the pick-and-place head rather than any particular
board: how high the nozzle hovers while travelling, how far below the tape
surface a component is released, and how many actuator units make up one
full turn of the nozzle.  The engine takes a ``MachineConfig`` explicitly so
tests can run it against any geometry.

A JSON file may override any subset of the defaults::

    {"hover_clearance_mm": 12, "rotation_units_per_turn": 360}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from picknplace.errors import MachineConfigError


@dataclass(frozen=True)
class MachineConfig:
    """Physical constants of the pick-and-place head.

    All distances are in millimetres.
    """

    hover_clearance_mm: float = 10.0
    """Height above the tape surface for horizontal travel moves."""

    placement_offset_mm: float = -2.0
    """Release height relative to the tape surface.  Negative when the
    board sits lower than the tapes."""

    rotation_units_per_turn: float = 50.34965
    """Actuator units for one 360° turn of the nozzle axis."""

    release_dwell_ms: int = 100
    """How long the release-assist air blows after the part is set down."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def angle_factor(self) -> float:
        """Actuator units per degree."""
        return self.rotation_units_per_turn / 360

    def to_rotation(self, angle_deg: float) -> float:
        """Scale a normalized angle (degrees) to actuator units."""
        return self.angle_factor * angle_deg


# Module-level singleton — the geometry of the reference machine.
DEFAULT_MACHINE = MachineConfig()


class _MachineFile(BaseModel):
    """Schema of a machine geometry JSON file."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    hover_clearance_mm: float = Field(default=DEFAULT_MACHINE.hover_clearance_mm, ge=0)
    placement_offset_mm: float = DEFAULT_MACHINE.placement_offset_mm
    rotation_units_per_turn: float = Field(default=DEFAULT_MACHINE.rotation_units_per_turn, gt=0)
    release_dwell_ms: int = Field(default=DEFAULT_MACHINE.release_dwell_ms, ge=0)


def parse_machine_config(data: dict, source: str = "<dict>") -> MachineConfig:
    """Validate a raw dict and build a MachineConfig from it."""
    try:
        parsed = _MachineFile.model_validate(data)
    except ValidationError as exc:
        raise MachineConfigError(source, str(exc)) from exc
    return MachineConfig(**parsed.model_dump())


def load_machine_config(path: Path | str) -> MachineConfig:
    """Load a machine geometry JSON file; missing keys keep their defaults."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise MachineConfigError(str(path), f"Read error: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MachineConfigError(str(path), f"Parse error: {exc}") from exc
    if not isinstance(raw, dict):
        raise MachineConfigError(str(path), "Expected a JSON object")
    return parse_machine_config(raw, source=str(path))

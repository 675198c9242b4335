"""Tape dataclasses — reels, slot positions and the parsed layout."""

from __future__ import annotations

from dataclasses import dataclass, field

from picknplace.errors import ConfigParseError, TapeExhausted


KEY_SEPARATOR = "@"


def component_key(footprint: str, value: str) -> str:
    """Identity key of a component type, e.g. ``"0805@10k"``."""
    return f"{footprint}{KEY_SEPARATOR}{value}"


@dataclass(frozen=True)
class Position:
    """A point in machine or board coordinates (mm)."""
    x: float
    y: float
    z: float = 0.0

    def translated(self, dx: float, dy: float, dz: float = 0.0) -> Position:
        return Position(self.x + dx, self.y + dy, self.z + dz)


@dataclass
class Tape:
    """One component reel with evenly spaced slots.

    Slot ``k`` sits at ``origin + k * spacing``; spacing only moves x/y.
    ``cursor`` is the index of the next slot to hand out and only ever
    grows, one step per successful ``next_position()``.
    """

    origin: Position = field(default_factory=lambda: Position(0.0, 0.0, 0.0))
    spacing: tuple[float, float] = (0.0, 0.0)
    angle: float = 0.0
    count: int = 0
    cursor: int = 0

    # ── Setup (layout loading) ─────────────────────────────────────

    def set_first_component_position(self, x: float, y: float, z: float) -> None:
        self.origin = Position(x, y, z)

    def set_component_spacing(self, dx: float, dy: float) -> None:
        if dx == 0 and dy == 0:
            raise ValueError("at least one of the spacing components must be non-zero")
        self.spacing = (dx, dy)

    def set_angle(self, degrees: float) -> None:
        self.angle = degrees

    def set_number_components(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"component count must be >= 0, got {n}")
        self.count = n

    # ── Dispensing ─────────────────────────────────────────────────

    @property
    def has_spacing(self) -> bool:
        return self.spacing != (0.0, 0.0)

    @property
    def remaining(self) -> int:
        return self.count - self.cursor

    def next_position(self) -> Position:
        """Return the next unused slot and advance the cursor.

        Raises TapeExhausted (cursor unchanged) once all ``count`` slots
        have been handed out.
        """
        if self.cursor >= self.count:
            raise TapeExhausted(count=self.count)
        dx, dy = self.spacing
        pos = Position(
            self.origin.x + self.cursor * dx,
            self.origin.y + self.cursor * dy,
            self.origin.z,
        )
        self.cursor += 1
        return pos


@dataclass
class TapeConfig:
    """Parsed tape layout: board origin + identity key → Tape.

    Several keys may point at the same Tape object; ``tapes`` holds each
    reel once, in declaration order.
    """

    board_origin: Position = field(default_factory=lambda: Position(0.0, 0.0))
    tape_for_component: dict[str, Tape] = field(default_factory=dict)
    tapes: list[Tape] = field(default_factory=list)

    def tape_for(self, footprint: str, value: str) -> Tape | None:
        return self.tape_for_component.get(component_key(footprint, value))

    def keys_for(self, tape: Tape) -> list[str]:
        """All identity keys that resolve to *tape*."""
        return [k for k, t in self.tape_for_component.items() if t is tape]


@dataclass
class TapeConfigResult:
    """Result of loading a tape layout — config or the errors that stopped it."""
    config: TapeConfig | None
    errors: list[ConfigParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.config is not None and len(self.errors) == 0

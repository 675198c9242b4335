"""Exception types shared across the tape loader, engine and readers."""

from __future__ import annotations


class PicknplaceError(Exception):
    """Base class for all errors raised by this package."""


class ConfigParseError(PicknplaceError):
    """A tape layout line that could not be applied."""

    def __init__(self, source: str, line_no: int, line: str, reason: str) -> None:
        self.source = source
        self.line_no = line_no
        self.line = line
        self.reason = reason
        if line:
            super().__init__(f"{source}:{line_no}: {reason}: '{line}'")
        else:
            super().__init__(f"{source}: {reason}")


# ── Per-placement errors ───────────────────────────────────────────


class PlacementError(PicknplaceError):
    """A single part could not be resolved; the run continues."""

    def __init__(self, key: str | None, message: str) -> None:
        self.key = key
        super().__init__(message)


class NoTapeForComponent(PlacementError):
    """No tape is registered under the part's identity key."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"No tape for '{key}'")


class TapeExhausted(PlacementError):
    """Every slot of the tape has been dispensed."""

    def __init__(self, key: str | None = None, count: int = 0) -> None:
        self.count = count
        if key is None:
            message = f"Tape exhausted after {count} components"
        else:
            message = f"We are out of components for '{key}'"
        super().__init__(key, message)


# ── Input errors ───────────────────────────────────────────────────


class PartListError(PicknplaceError):
    """A malformed row in a part list."""

    def __init__(self, row: int, reason: str) -> None:
        self.row = row
        self.reason = reason
        super().__init__(f"Part list row {row}: {reason}")


class MachineConfigError(PicknplaceError):
    """An invalid machine geometry file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Machine config '{path}': {reason}")

"""
G-code text blocks for the pick-and-place head.

Downstream tools compare this output textually, so every line (comments
and spacing included) is fixed.  Coordinates and rotations are printed with
three decimals.  The rotation goes on the E axis: the nozzle turns on an
extruder drive rather than a real A axis.

Each function returns a list of lines without trailing newlines; a leading
empty string produces the blank line that separates blocks.
"""

from __future__ import annotations

from picknplace.placement.models import Frame


PREAMBLE = [
    "",
    "; Preamble. Fill be whatever is necessary to init.",
    "; Assumes an 'A' axis that rotates the pick'n place nozzle. The values",
    "; 0..360 correspond to absolute degrees.",
    "; (correction: for now, we mess with an E-axis instead of A)",
    "G28 X0 Y0  ; Now home (x/y) - needle over free space",
    "G28 Z0     ; Now it is safe to home z",
    "T1         ; Use E1 extruder",
    "M302",
    "G92 E0",
    "",
    "G1 Z35 E0 F2500 ; Move needle out of way",
]

FINISH = [
    "",
    "M84 ; done.",
]


def pick_lines(name: str, frame: Frame) -> list[str]:
    """Hover over the slot, descend, switch on the vacuum, lift."""
    return [
        "",
        f"; Pick {name}",
        f"G1 X{frame.x:.3f} Y{frame.y:.3f} Z{frame.z_travel:.3f} E{frame.rotation:.3f} ; Move over component to pick.",
        f"G1 Z{frame.z_down:.3f}   ; move down",
        "G4",
        "M42 P6 S255  ; turn on suckage",
        f"G1 Z{frame.z_travel:.3f}  ; Move up a bit for traveling",
    ]


def place_lines(name: str, frame: Frame, release_dwell_ms: int = 100) -> list[str]:
    """Hover over the target, descend, drop the vacuum, blow, lift."""
    return [
        "",
        f"; Place {name}",
        f"G1 X{frame.x:.3f} Y{frame.y:.3f} Z{frame.z_travel:.3f} E{frame.rotation:.3f} ; Move over component to place.",
        f"G1 Z{frame.z_down:.3f}    ; move down.",
        "G4",
        "M42 P6 S0    ; turn off suckage",
        "G4",
        "M42 P8 S255  ; blow",
        f"G4 P{release_dwell_ms}      ; .. for {release_dwell_ms}ms",
        "M42 P8 S0    ; done.",
        f"G1 Z{frame.z_travel:.3f}   ; Move up",
    ]

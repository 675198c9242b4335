"""Placement — resolves parts against tapes into absolute machine frames.

Submodules:
  models   Frame and ResolvedPlacement dataclasses.
  engine   resolve_placement / place_parts and angle normalization.
"""

from .models import Frame, ResolvedPlacement
from .engine import resolve_placement, place_parts, normalize_angle

__all__ = [
    "Frame", "ResolvedPlacement",
    "resolve_placement", "place_parts", "normalize_angle",
]

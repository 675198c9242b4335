"""Part lists — the Part model and readers for common CAD exports."""

from .models import Part
from .parsing import (
    FORMATS, read_parts, detect_format,
    read_kicad_pos, read_kicad_ascii_pos, read_eagle_mnt, read_json_parts,
)

__all__ = [
    "Part",
    "FORMATS", "read_parts", "detect_format",
    "read_kicad_pos", "read_kicad_ascii_pos", "read_eagle_mnt", "read_json_parts",
]

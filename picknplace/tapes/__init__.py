"""Tapes — reel model, layout loading and serialization.

Submodules:
  models        Position, Tape, TapeConfig and the load result.
  loader        Line-oriented layout parser (parse_tape_config, load_tape_config).
  serialization JSON-safe dump of a parsed layout.
"""

from .models import (
    Position, Tape, TapeConfig, TapeConfigResult, component_key, KEY_SEPARATOR,
)
from .loader import parse_tape_config, load_tape_config
from .serialization import tape_config_to_dict, tape_to_dict

__all__ = [
    # Models
    "Position", "Tape", "TapeConfig", "TapeConfigResult",
    "component_key", "KEY_SEPARATOR",
    # Loader
    "parse_tape_config", "load_tape_config",
    # Serialization
    "tape_config_to_dict", "tape_to_dict",
]

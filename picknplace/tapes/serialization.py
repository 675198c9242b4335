"""Tape layout serialization — JSON-safe dump of a parsed TapeConfig."""

from __future__ import annotations

from .models import Tape, TapeConfig


def tape_to_dict(tape: Tape) -> dict:
    return {
        "origin": [tape.origin.x, tape.origin.y, tape.origin.z],
        "spacing": list(tape.spacing),
        "angle": tape.angle,
        "count": tape.count,
        "used": tape.cursor,
    }


def tape_config_to_dict(config: TapeConfig) -> dict:
    """Serialize a TapeConfig; aliased keys are listed under their tape."""
    return {
        "board_origin": [config.board_origin.x, config.board_origin.y],
        "tapes": [
            {"components": config.keys_for(tape), **tape_to_dict(tape)}
            for tape in config.tapes
        ],
    }

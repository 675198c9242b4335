"""
G-code output for the pick-and-place head.

Renders resolved placements as fixed-format pick and place blocks,
framed by a homing preamble and a closing motors-off command.
"""

from .emitter import GcodeEmitter
from .pipeline import GcodePipelineResult, run_gcode_pipeline

__all__ = ["GcodeEmitter", "GcodePipelineResult", "run_gcode_pipeline"]

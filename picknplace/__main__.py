"""
picknplace — entry point.

Usage:
    python -m picknplace tapes.cfg --parts board-pos.csv > board.gcode
    python -m picknplace tapes.cfg --format eagle < board.mnt
    python -m picknplace tapes.cfg --dump-config
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from picknplace.config import DEFAULT_MACHINE, load_machine_config
from picknplace.errors import MachineConfigError, PartListError
from picknplace.gcode import run_gcode_pipeline
from picknplace.parts import FORMATS, read_parts
from picknplace.tapes import load_tape_config, tape_config_to_dict

log = logging.getLogger("picknplace")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="picknplace",
        description="Tape layout + part list → pick-and-place G-code on stdout",
    )
    p.add_argument("config", help="Path to the tape layout file")
    p.add_argument("--parts", default="-",
                   help="Part list file ('-' or omitted: read stdin)")
    p.add_argument("--format", default="auto", choices=("auto",) + FORMATS,
                   help="Part list format (default: from file extension, kicad for stdin)")
    p.add_argument("--machine", default=None,
                   help="JSON file overriding the machine geometry")
    p.add_argument("--dump-config", action="store_true",
                   help="Print the parsed tape layout as JSON and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    loaded = load_tape_config(args.config)
    if not loaded.ok:
        for err in loaded.errors:
            log.error("%s", err)
        log.error("Could not load tape layout '%s'", args.config)
        return 1
    config = loaded.config
    log.debug("Tape layout: %s", json.dumps(tape_config_to_dict(config)))

    if args.dump_config:
        print(json.dumps(tape_config_to_dict(config), indent=2))
        return 0

    machine = DEFAULT_MACHINE
    if args.machine:
        try:
            machine = load_machine_config(args.machine)
        except MachineConfigError as exc:
            log.error("%s", exc)
            return 1

    try:
        parts = read_parts(args.parts, fmt=args.format)
    except (PartListError, OSError) as exc:
        log.error("Could not read part list '%s': %s", args.parts, exc)
        return 1

    run_gcode_pipeline(config, parts, sys.stdout, machine=machine)
    return 0


if __name__ == "__main__":
    sys.exit(main())

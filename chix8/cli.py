"""Headless command line runner."""

import argparse
import sys
from typing import Optional, Sequence

import jax

from chix8.config import MachineConfig
from chix8.emulator import run
from chix8.errors import ConfigError, LoadError, MachineFault
from chix8.loader import load_font_file, load_rom
from chix8.logging import get_logger, set_log_level
from chix8.rendering import display_to_ascii, save_frame
from chix8.state import create_state

logger = get_logger("chix8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chix8",
        description="Run a CHIP-8 ROM headlessly and print the final frame",
    )
    parser.add_argument("rom", help="Path to the CHIP-8 program image")
    parser.add_argument(
        "--frames",
        type=int,
        default=60,
        help="Number of 60 Hz frames to run (default: 60)",
    )
    parser.add_argument(
        "--ipf",
        type=int,
        default=10,
        help="Instructions per frame (default: 10)",
    )
    parser.add_argument(
        "--preset",
        choices=["modern", "cosmac"],
        default="modern",
        help="Compatibility quirk preset (default: modern)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the CXNN random generator (default: 0)",
    )
    parser.add_argument("--font", help="Optional 80-byte font file")
    parser.add_argument("--png", help="Also save the final frame to this image file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (default: $CHIX8_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)

    try:
        config = MachineConfig.preset(args.preset)
        state = create_state(jax.random.PRNGKey(args.seed), config)
        if args.font:
            state = load_font_file(state, args.font)
        state = load_rom(state, args.rom)
    except (ConfigError, LoadError) as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        state = run(state, args.frames, args.ipf, progress=args.progress)
    except MachineFault as fault:
        print(f"machine fault: {fault}", file=sys.stderr)
        return 2

    frame = state.display.snapshot()
    print(display_to_ascii(frame))
    if args.png:
        save_frame(frame, args.png)
        logger.info(f"Saved frame to {args.png}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

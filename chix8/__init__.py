"""CHIP-8 emulator package."""

from chix8.config import MachineConfig
from chix8.state import EmulatorState, create_state
from chix8.display import Display
from chix8.emulator import (
    execute, fetch, step, tick_timers, press_key, release_key, set_keypad,
    sound_active, run_frame, run,
)
from chix8.loader import load_program, load_rom, load_font, load_font_file, font_address
from chix8.decode import Instruction, OpcodeFields, decode, split
from chix8.errors import (
    Chip8Error, ConfigError, LoadError, OutOfSpaceError, InvalidFontError,
    MachineFault, StackOverflowError, StackUnderflowError, MemoryAccessError,
)
from chix8.constants import *
from chix8.rendering import chip8_display_to_rgb, create_color_scheme, display_to_ascii, save_frame

__all__ = [
    "MachineConfig",
    "EmulatorState",
    "create_state",
    "Display",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "press_key",
    "release_key",
    "set_keypad",
    "sound_active",
    "run_frame",
    "run",
    "load_program",
    "load_rom",
    "load_font",
    "load_font_file",
    "font_address",
    "Instruction",
    "OpcodeFields",
    "decode",
    "split",
    "Chip8Error",
    "ConfigError",
    "LoadError",
    "OutOfSpaceError",
    "InvalidFontError",
    "MachineFault",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "display_to_ascii",
    "save_frame",
]

"""Program and font loading."""

from typing import Optional, Sequence

from chix8.config import MachineConfig
from chix8.constants import FONT_DATA, FONT_SIZE, GLYPH_SIZE, MAX_PROGRAM_SIZE, PROGRAM_START
from chix8.errors import InvalidFontError, LoadError, OutOfSpaceError
from chix8.logging import get_logger
from chix8.state import EmulatorState, write_memory

logger = get_logger("chix8.loader")


def font_address(config: MachineConfig, digit: int) -> int:
    """Address of the glyph for hexadecimal ``digit``."""
    return config.font_start + GLYPH_SIZE * (int(digit) & 0xF)


def _read_file(filename: str) -> bytes:
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise LoadError(f"Cannot read {filename}: {e}") from e


def load_program(state: EmulatorState, data: bytes) -> EmulatorState:
    """Load a program image into memory starting at 0x200."""
    if len(data) > MAX_PROGRAM_SIZE:
        raise OutOfSpaceError(
            f"Program is {len(data)} bytes, at most {MAX_PROGRAM_SIZE} fit above 0x{PROGRAM_START:03X}"
        )
    logger.debug(f"Loading {len(data)} program bytes at 0x{PROGRAM_START:03X}")
    return write_memory(state, PROGRAM_START, list(data))


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    rom_data = _read_file(filename)
    state = load_program(state, rom_data)
    logger.info(f"Loaded {filename} ({len(rom_data)} bytes)")
    return state


def load_font(state: EmulatorState, font: Optional[Sequence[int]] = None) -> EmulatorState:
    """Load a 16-glyph font table at the configured font address.

    Args:
        state: Machine to load into
        font: 80 bytes, 5 per hexadecimal digit. Defaults to the built-in font.

    Returns:
        State with the font in memory
    """
    try:
        font = FONT_DATA if font is None else bytes(font)
    except (TypeError, ValueError) as e:
        raise InvalidFontError(f"Font must be a sequence of byte values: {e}") from e
    if len(font) != FONT_SIZE:
        raise InvalidFontError(f"Font must be {FONT_SIZE} bytes, got {len(font)}")
    return write_memory(state, state.config.font_start, list(font))


def load_font_file(state: EmulatorState, filename: str) -> EmulatorState:
    """Load a font table from a file."""
    state = load_font(state, _read_file(filename))
    logger.info(f"Loaded font {filename}")
    return state

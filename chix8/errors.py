"""Exception hierarchy for the CHIP-8 emulator."""

from typing import Optional


class Chip8Error(Exception):
    """Base class for every error raised by chix8."""


class ConfigError(Chip8Error, ValueError):
    """Invalid machine configuration."""


class LoadError(Chip8Error, IOError):
    """A program or font image could not be loaded."""


class OutOfSpaceError(LoadError):
    """Image does not fit in the memory available to it."""


class InvalidFontError(LoadError):
    """Font table does not have the expected shape."""


class MachineFault(Chip8Error):
    """Machine-state contract violation raised while executing an instruction.

    The state passed to the faulting call is left untouched, so the host can
    inspect it or stop cleanly.
    """

    def __init__(self, message: str, pc: Optional[int] = None):
        if pc is not None:
            message = f"{message} (pc=0x{pc:03X})"
        super().__init__(message)
        self.pc = pc


class StackOverflowError(MachineFault):
    """Call with a full return stack."""


class StackUnderflowError(MachineFault):
    """Return with an empty return stack."""


class MemoryAccessError(MachineFault):
    """Memory access outside the 4 KiB address space."""

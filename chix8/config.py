"""Compatibility quirks for historical CHIP-8 interpreters."""

from flax.struct import dataclass

from chix8.constants import FONT_START, FONT_SIZE, PROGRAM_START
from chix8.errors import ConfigError


@dataclass(frozen=True)
class MachineConfig:
    """Construction-time configuration of a CHIP-8 machine.

    Attributes:
        font_start: Address the font table is loaded at
        off_jump_legacy: BNNN jumps to NNN + V0 instead of NNN + VX
        reg_save_legacy: FX55/FX65 leave I pointing past the last register
        index_add_carry: FX1E sets VF when I overflows the address space
        shift_legacy: 8XY6/8XYE shift VY into VX instead of shifting VX
        logic_resets_flag: 8XY1/8XY2/8XY3 reset VF
        sprite_clipping: DXYN drops pixels past the screen edge instead of wrapping
    """
    font_start: int = FONT_START
    off_jump_legacy: bool = False
    reg_save_legacy: bool = False
    index_add_carry: bool = False
    shift_legacy: bool = False
    logic_resets_flag: bool = False
    sprite_clipping: bool = False

    def __post_init__(self):
        if not 0 <= self.font_start <= PROGRAM_START - FONT_SIZE:
            raise ConfigError(
                f"font_start 0x{self.font_start:03X} must leave room for the "
                f"{FONT_SIZE}-byte font below 0x{PROGRAM_START:03X}"
            )

    @classmethod
    def preset(cls, name: str) -> "MachineConfig":
        """Get a named configuration ("modern" or "cosmac")."""
        presets = {
            "modern": {},
            "cosmac": dict(
                off_jump_legacy=True,
                reg_save_legacy=True,
                shift_legacy=True,
                logic_resets_flag=True,
                sprite_clipping=True,
            ),
        }

        if name not in presets:
            raise ConfigError(
                f"Unknown preset '{name}'. Available: {list(presets.keys())}"
            )

        return cls(**presets[name])

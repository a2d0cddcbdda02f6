"""CHIP-8 instruction decoding.

A raw 16-bit word is first split into its nibble fields, then classified into
one instruction variant per opcode. Each variant carries the raw word plus only
the operands its semantics need. Decoding is total: words without assigned
semantics become ``Unknown``.
"""

import dataclasses
from typing import Union

from chex import dataclass


@dataclass(frozen=True)
class OpcodeFields:
    """Instruction word split into its operand fields."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def split(instruction: int) -> OpcodeFields:
    """Split 16-bit instruction into components."""
    return OpcodeFields(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


# 0xxx - system

@dataclass(frozen=True)
class ClearScreen:
    """00E0"""
    raw: int


@dataclass(frozen=True)
class Return:
    """00EE"""
    raw: int


@dataclass(frozen=True)
class MachineCall:
    """0NNN - call a native routine of the host machine."""
    raw: int
    nnn: int


# Control flow

@dataclass(frozen=True)
class Jump:
    """1NNN"""
    raw: int
    nnn: int


@dataclass(frozen=True)
class Call:
    """2NNN"""
    raw: int
    nnn: int


@dataclass(frozen=True)
class SkipIfEqualImmediate:
    """3XNN"""
    raw: int
    x: int
    nn: int


@dataclass(frozen=True)
class SkipIfNotEqualImmediate:
    """4XNN"""
    raw: int
    x: int
    nn: int


@dataclass(frozen=True)
class SkipIfEqualRegister:
    """5XY0"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class SkipIfNotEqualRegister:
    """9XY0"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class JumpWithOffset:
    """BNNN"""
    raw: int
    x: int
    nnn: int


@dataclass(frozen=True)
class SkipIfKeyPressed:
    """EX9E"""
    raw: int
    x: int


@dataclass(frozen=True)
class SkipIfKeyNotPressed:
    """EXA1"""
    raw: int
    x: int


# Registers and memory

@dataclass(frozen=True)
class SetImmediate:
    """6XNN"""
    raw: int
    x: int
    nn: int


@dataclass(frozen=True)
class AddImmediate:
    """7XNN"""
    raw: int
    x: int
    nn: int


@dataclass(frozen=True)
class SetIndex:
    """ANNN"""
    raw: int
    nnn: int


@dataclass(frozen=True)
class Random:
    """CXNN"""
    raw: int
    x: int
    nn: int


# 8XYN - ALU

@dataclass(frozen=True)
class Assign:
    """8XY0"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class Or:
    """8XY1"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class And:
    """8XY2"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class Xor:
    """8XY3"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class AddRegister:
    """8XY4"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class SubtractRegister:
    """8XY5"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class ShiftRight:
    """8XY6"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class SubtractReversed:
    """8XY7"""
    raw: int
    x: int
    y: int


@dataclass(frozen=True)
class ShiftLeft:
    """8XYE"""
    raw: int
    x: int
    y: int


# Display

@dataclass(frozen=True)
class Draw:
    """DXYN"""
    raw: int
    x: int
    y: int
    n: int


# FXNN - timers, index and bulk memory

@dataclass(frozen=True)
class GetDelayTimer:
    """FX07"""
    raw: int
    x: int


@dataclass(frozen=True)
class WaitForKey:
    """FX0A"""
    raw: int
    x: int


@dataclass(frozen=True)
class SetDelayTimer:
    """FX15"""
    raw: int
    x: int


@dataclass(frozen=True)
class SetSoundTimer:
    """FX18"""
    raw: int
    x: int


@dataclass(frozen=True)
class AddToIndex:
    """FX1E"""
    raw: int
    x: int


@dataclass(frozen=True)
class FontCharacter:
    """FX29"""
    raw: int
    x: int


@dataclass(frozen=True)
class StoreBCD:
    """FX33"""
    raw: int
    x: int


@dataclass(frozen=True)
class StoreRegisters:
    """FX55"""
    raw: int
    x: int


@dataclass(frozen=True)
class LoadRegisters:
    """FX65"""
    raw: int
    x: int


@dataclass(frozen=True)
class Unknown:
    """Word with no assigned semantics."""
    raw: int


INSTRUCTION_TYPES = (
    ClearScreen, Return, MachineCall, Jump, Call,
    SkipIfEqualImmediate, SkipIfNotEqualImmediate,
    SkipIfEqualRegister, SkipIfNotEqualRegister,
    SetImmediate, AddImmediate,
    Assign, Or, And, Xor, AddRegister, SubtractRegister,
    ShiftRight, SubtractReversed, ShiftLeft,
    SetIndex, JumpWithOffset, Random, Draw,
    SkipIfKeyPressed, SkipIfKeyNotPressed,
    GetDelayTimer, WaitForKey, SetDelayTimer, SetSoundTimer,
    AddToIndex, FontCharacter, StoreBCD, StoreRegisters, LoadRegisters,
    Unknown,
)

Instruction = Union[INSTRUCTION_TYPES]

_SYSTEM = {0x00E0: ClearScreen, 0x00EE: Return}

# Opcodes fully determined by their first nibble
_PRIMARY = {
    0x1: Jump,
    0x2: Call,
    0x3: SkipIfEqualImmediate,
    0x4: SkipIfNotEqualImmediate,
    0x6: SetImmediate,
    0x7: AddImmediate,
    0xA: SetIndex,
    0xB: JumpWithOffset,
    0xC: Random,
    0xD: Draw,
}

# 5XY0 and 9XY0 only exist with a zero last nibble
_REGISTER_COMPARE = {0x5: SkipIfEqualRegister, 0x9: SkipIfNotEqualRegister}

_ALU = {
    0x0: Assign,
    0x1: Or,
    0x2: And,
    0x3: Xor,
    0x4: AddRegister,
    0x5: SubtractRegister,
    0x6: ShiftRight,
    0x7: SubtractReversed,
    0xE: ShiftLeft,
}

_KEY = {0x9E: SkipIfKeyPressed, 0xA1: SkipIfKeyNotPressed}

_MISC = {
    0x07: GetDelayTimer,
    0x0A: WaitForKey,
    0x15: SetDelayTimer,
    0x18: SetSoundTimer,
    0x1E: AddToIndex,
    0x29: FontCharacter,
    0x33: StoreBCD,
    0x55: StoreRegisters,
    0x65: LoadRegisters,
}


def _build(variant, fields: OpcodeFields):
    operands = {f.name: getattr(fields, f.name) for f in dataclasses.fields(variant)}
    return variant(**operands)


def decode(instruction: int) -> Instruction:
    """Decode a 16-bit instruction word into its instruction variant."""
    instruction = int(instruction)
    if not 0 <= instruction <= 0xFFFF:
        raise ValueError(f"Instruction word {instruction:#x} does not fit in 16 bits")

    fields = split(instruction)
    if fields.opcode == 0x0:
        variant = _SYSTEM.get(fields.raw, MachineCall)
    elif fields.opcode in _REGISTER_COMPARE:
        variant = _REGISTER_COMPARE[fields.opcode] if fields.n == 0 else Unknown
    elif fields.opcode == 0x8:
        variant = _ALU.get(fields.n, Unknown)
    elif fields.opcode == 0xE:
        variant = _KEY.get(fields.nn, Unknown)
    elif fields.opcode == 0xF:
        variant = _MISC.get(fields.nn, Unknown)
    else:
        variant = _PRIMARY[fields.opcode]
    return _build(variant, fields)

"""CHIP-8 ALU operations (8xxx).

Each operation maps (VX, VY) to (result, VF). A VF of None leaves the flag
register untouched. The flag is written after the result, so an operation
targeting VF ends up holding the flag.
"""

from typing import Optional

from chix8.constants import FLAG_REGISTER
from chix8.state import EmulatorState
from chix8.decode import (
    And, AddRegister, Assign, Or, ShiftLeft, ShiftRight,
    SubtractRegister, SubtractReversed, Xor,
)


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


_OPERATIONS = {
    Assign: alu_set,
    Or: alu_or,
    And: alu_and,
    Xor: alu_xor,
    AddRegister: alu_add,
    SubtractRegister: alu_sub_xy,
    ShiftRight: alu_shift_right,
    SubtractReversed: alu_sub_yx,
    ShiftLeft: alu_shift_left,
}

_LOGIC_OPERATIONS = (Or, And, Xor)
_SHIFT_OPERATIONS = (ShiftRight, ShiftLeft)


def execute_alu_operation(state: EmulatorState, instruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    # Original interpreter shifted VY and stored the result in VX
    if state.config.shift_legacy and isinstance(instruction, _SHIFT_OPERATIONS):
        vx = vy

    result, vf = _OPERATIONS[type(instruction)](vx, vy)

    if state.config.logic_resets_flag and isinstance(instruction, _LOGIC_OPERATIONS):
        vf = 0

    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)

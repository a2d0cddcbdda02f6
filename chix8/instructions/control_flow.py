"""CHIP-8 control flow instructions."""

from chix8.state import EmulatorState, as_address
from chix8.decode import Call, Jump, JumpWithOffset
from chix8.stack import push


def execute_jump(state: EmulatorState, instruction: Jump) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=as_address(instruction.nnn))


def execute_call(state: EmulatorState, instruction: Call) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc, pc=int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return state.replace(pc=as_address(int(state.pc) + 2))
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def _key_pressed(state: EmulatorState, inst) -> bool:
    key_index = int(state.V[inst.x]) & 0xF
    return bool(state.keypad[key_index])


execute_skip_if_key_pressed = make_skip_instruction(_key_pressed)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst)
)


def execute_jump_with_offset(state: EmulatorState, instruction: JumpWithOffset) -> EmulatorState:
    """BNNN - Jump to NNN + VX, or NNN + V0 with the legacy quirk."""
    register = 0 if state.config.off_jump_legacy else instruction.x
    return state.replace(pc=as_address(instruction.nnn + int(state.V[register])))

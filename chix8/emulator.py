"""Main CHIP-8 emulator execution engine.

The host drives the machine by calling :func:`step` at its instruction rate,
:func:`tick_timers` at 60 Hz and the key functions as input arrives.
:func:`run_frame` bundles one 60 Hz frame of that interleaving.
"""

from typing import Sequence

import jax.numpy as jnp
from tqdm import tqdm

from chix8 import decode as isa
from chix8.constants import NUM_KEYS
from chix8.decode import INSTRUCTION_TYPES, decode
from chix8.errors import MachineFault
from chix8.logging import get_logger
from chix8.state import EmulatorState, as_address, read_memory
from chix8.instructions.system import (
    execute_clear_screen, execute_return, execute_machine_call, execute_unknown
)
from chix8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed
)
from chix8.instructions.alu import execute_alu_operation
from chix8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chix8.instructions.display import execute_display
from chix8.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

logger = get_logger("chix8.cpu")

_HANDLERS = {
    isa.ClearScreen: execute_clear_screen,
    isa.Return: execute_return,
    isa.MachineCall: execute_machine_call,
    isa.Jump: execute_jump,
    isa.Call: execute_call,
    isa.SkipIfEqualImmediate: execute_skip_if_equal_immediate,
    isa.SkipIfNotEqualImmediate: execute_skip_if_not_equal_immediate,
    isa.SkipIfEqualRegister: execute_skip_if_equal_register,
    isa.SkipIfNotEqualRegister: execute_skip_if_not_equal_register,
    isa.SetImmediate: execute_set,
    isa.AddImmediate: execute_add,
    isa.Assign: execute_alu_operation,
    isa.Or: execute_alu_operation,
    isa.And: execute_alu_operation,
    isa.Xor: execute_alu_operation,
    isa.AddRegister: execute_alu_operation,
    isa.SubtractRegister: execute_alu_operation,
    isa.ShiftRight: execute_alu_operation,
    isa.SubtractReversed: execute_alu_operation,
    isa.ShiftLeft: execute_alu_operation,
    isa.SetIndex: execute_set_index,
    isa.JumpWithOffset: execute_jump_with_offset,
    isa.Random: execute_random,
    isa.Draw: execute_display,
    isa.SkipIfKeyPressed: execute_skip_if_key_pressed,
    isa.SkipIfKeyNotPressed: execute_skip_if_key_not_pressed,
    isa.GetDelayTimer: execute_get_delay_timer,
    isa.WaitForKey: execute_wait_for_key,
    isa.SetDelayTimer: execute_set_delay_timer,
    isa.SetSoundTimer: execute_set_sound_timer,
    isa.AddToIndex: execute_add_to_index,
    isa.FontCharacter: execute_font_character,
    isa.StoreBCD: execute_bcd_conversion,
    isa.StoreRegisters: execute_store_registers,
    isa.LoadRegisters: execute_load_registers,
    isa.Unknown: execute_unknown,
}


def execute(state: EmulatorState, instruction) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Args:
        state: Machine state, the program counter already past the instruction
        instruction: Raw 16-bit word or an already decoded instruction

    Returns:
        New machine state

    Raises:
        MachineFault: On stack overflow/underflow or out-of-range memory access.
            The given state is left untouched.
    """
    if not isinstance(instruction, INSTRUCTION_TYPES):
        instruction = decode(instruction)

    if logger.is_enabled_for("DEBUG"):
        logger.debug(f"pc=0x{int(state.pc):03X} {instruction.raw:04X} {type(instruction).__name__}")

    try:
        return _HANDLERS[type(instruction)](state, instruction)
    except MachineFault as fault:
        logger.error(f"Machine fault executing 0x{instruction.raw:04X}: {fault}")
        raise


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    high, low = (int(b) for b in read_memory(state, state.pc, 2))
    return state.replace(pc=as_address(int(state.pc) + 2)), (high << 8) | low


def step(state: EmulatorState) -> EmulatorState:
    """Fetch and execute one instruction, unless waiting for a key."""
    if state.awaiting_key:
        return state
    state, instruction = fetch(state)
    return execute(state, instruction)


def _check_key(key: int) -> int:
    key = int(key)
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key {key} is outside the keypad (0-{NUM_KEYS - 1})")
    return key


def set_keypad(state: EmulatorState, keys: Sequence[bool]) -> EmulatorState:
    """Replace the whole keypad state.

    If the machine waits on FX0A and some key went from up to down, the
    lowest such key is stored in the waiting register and execution resumes.
    """
    keypad = jnp.asarray(keys, dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got {keypad.shape[0]}")

    newly_pressed = keypad & ~state.keypad
    state = state.replace(keypad=keypad)

    if state.awaiting_key and bool(jnp.any(newly_pressed)):
        key = int(jnp.argmax(newly_pressed))
        state = state.replace(
            V=state.V.at[state.key_register].set(key),
            awaiting_key=False,
        )
    return state


def press_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark one key as held down."""
    return set_keypad(state, state.keypad.at[_check_key(key)].set(True))


def release_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark one key as released."""
    return set_keypad(state, state.keypad.at[_check_key(key)].set(False))


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers toward zero (60 Hz)."""
    return state.replace(
        delay_timer=jnp.asarray(max(int(state.delay_timer) - 1, 0), dtype=jnp.uint8),
        sound_timer=jnp.asarray(max(int(state.sound_timer) - 1, 0), dtype=jnp.uint8),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the buzzer should sound."""
    return int(state.sound_timer) > 0


def run_frame(state: EmulatorState, instructions_per_frame: int = 10) -> EmulatorState:
    """Run one 60 Hz frame: a batch of instructions, then a timer tick."""
    for _ in range(instructions_per_frame):
        state = step(state)
    return tick_timers(state)


def run(
    state: EmulatorState,
    num_frames: int,
    instructions_per_frame: int = 10,
    progress: bool = False,
) -> EmulatorState:
    """Run ``num_frames`` frames, optionally with a progress bar."""
    logger.info(f"Running {num_frames} frames at {instructions_per_frame} instructions per frame")
    for _ in tqdm(range(num_frames), desc="frames", unit="frame", disable=not progress):
        state = run_frame(state, instructions_per_frame)
    logger.info(f"Stopped at pc=0x{int(state.pc):03X}")
    return state

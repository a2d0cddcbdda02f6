"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chix8.constants import ADDRESS_MASK, FLAG_REGISTER
from chix8.state import EmulatorState, as_address, read_memory, write_memory
from chix8.decode import (
    AddToIndex, FontCharacter, GetDelayTimer, LoadRegisters, SetDelayTimer,
    SetSoundTimer, StoreBCD, StoreRegisters, WaitForKey,
)
from chix8.loader import font_address


def execute_get_delay_timer(state: EmulatorState, instruction: GetDelayTimer) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: SetDelayTimer) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: SetSoundTimer) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: AddToIndex) -> EmulatorState:
    """FX1E - Add VX to I register.

    I wraps around the 12-bit address space. With ``index_add_carry`` VF
    reports whether the addition overflowed; otherwise VF is left alone.
    """
    total = int(state.I) + int(state.V[instruction.x])
    state = state.replace(I=as_address(total))
    if state.config.index_add_carry:
        state = state.replace(V=state.V.at[FLAG_REGISTER].set(int(total > ADDRESS_MASK)))
    return state


def execute_wait_for_key(state: EmulatorState, instruction: WaitForKey) -> EmulatorState:
    """FX0A - Suspend until a key goes down, the key is then stored in VX."""
    return state.replace(awaiting_key=True, key_register=instruction.x)


def execute_font_character(state: EmulatorState, instruction: FontCharacter) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    return state.replace(I=as_address(font_address(state.config, state.V[instruction.x])))


def execute_bcd_conversion(state: EmulatorState, instruction: StoreBCD) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return write_memory(state, state.I, digits)


def execute_store_registers(state: EmulatorState, instruction: StoreRegisters) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    state = write_memory(state, state.I, state.V[:count])

    if state.config.reg_save_legacy:
        state = state.replace(I=as_address(int(state.I) + count))
    return state


def execute_load_registers(state: EmulatorState, instruction: LoadRegisters) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    values = read_memory(state, state.I, count)
    state = state.replace(V=state.V.at[:count].set(jnp.asarray(values, dtype=jnp.uint8)))

    if state.config.reg_save_legacy:
        state = state.replace(I=as_address(int(state.I) + count))
    return state

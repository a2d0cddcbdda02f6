"""CHIP-8 memory and register operations."""

import jax
from chix8.state import EmulatorState, as_address
from chix8.decode import AddImmediate, Random, SetImmediate, SetIndex


def execute_set(state: EmulatorState, instruction: SetImmediate) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.nn))


def execute_add(state: EmulatorState, instruction: AddImmediate) -> EmulatorState:
    """7XNN - Add NN to VX, VF is not affected."""
    result = (int(state.V[instruction.x]) + instruction.nn) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(result))


def execute_set_index(state: EmulatorState, instruction: SetIndex) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=as_address(instruction.nnn))


def execute_random(state: EmulatorState, instruction: Random) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    return state.replace(V=state.V.at[instruction.x].set(random_value & instruction.nn), rng=key)

"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chix8.config import MachineConfig
from chix8.constants import ADDRESS_MASK, PROGRAM_START, FONT_DATA, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, STACK_SIZE
from chix8.display import Display
from chix8.errors import MemoryAccessError


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: Display = field(default_factory=Display)
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    # FX0A suspends execution until a key goes down
    awaiting_key: bool = False
    key_register: int = 0
    config: MachineConfig = field(pytree_node=False, default=MachineConfig())


def as_address(value) -> jnp.ndarray:
    """Wrap a value into the 12-bit address space as a uint16 scalar."""
    return jnp.asarray(int(value) & ADDRESS_MASK, dtype=jnp.uint16)


def _check_range(state: EmulatorState, address: int, length: int):
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(
            f"Access to 0x{address:X}..0x{address + length - 1:X} is outside memory",
            pc=int(state.pc),
        )


def read_memory(state: EmulatorState, address: int, length: int = 1) -> jnp.ndarray:
    """Read ``length`` bytes starting at ``address``."""
    address = int(address)
    _check_range(state, address, length)
    return state.memory[address:address + length]


def write_memory(state: EmulatorState, address: int, values) -> EmulatorState:
    """Write a sequence of bytes starting at ``address``."""
    address = int(address)
    values = jnp.asarray(values, dtype=jnp.uint8).reshape(-1)
    _check_range(state, address, values.shape[0])
    return state.replace(memory=state.memory.at[address:address + values.shape[0]].set(values))


def create_state(
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
    config: MachineConfig = MachineConfig(),
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(rng, config=config)
    return write_memory(state, config.font_start, FONT_DATA)

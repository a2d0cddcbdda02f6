"""CHIP-8 stack operations."""

from typing import Optional

import jax.numpy as jnp
from chix8.constants import ADDRESS_MASK, STACK_SIZE
from chix8.errors import StackOverflowError, StackUnderflowError
from chix8.state import StackState


def push(stack: StackState, address: jnp.ndarray, pc: Optional[int] = None) -> StackState:
    """Push address onto stack."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflowError(f"Call depth exceeds {STACK_SIZE}", pc=pc)
    masked_address = int(address) & ADDRESS_MASK
    new_data = stack.data.at[stack.pointer].set(masked_address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState, pc: Optional[int] = None) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if stack.pointer <= 0:
        raise StackUnderflowError("Return with an empty stack", pc=pc)
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address

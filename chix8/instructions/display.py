"""CHIP-8 display operations."""

from chix8.constants import FLAG_REGISTER
from chix8.state import EmulatorState, read_memory
from chix8.decode import Draw


def execute_display(state: EmulatorState, instruction: Draw) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite = read_memory(state, state.I, instruction.n)
    display, collided = state.display.draw_sprite(
        state.V[instruction.x],
        state.V[instruction.y],
        sprite,
        clip=state.config.sprite_clipping,
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(collided))
    )

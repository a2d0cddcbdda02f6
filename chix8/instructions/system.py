"""CHIP-8 system instructions (0x0xxx) and unassigned words."""

from chix8.state import EmulatorState
from chix8.decode import ClearScreen, MachineCall, Unknown
from chix8.logging import get_logger
from chix8.stack import pop

logger = get_logger("chix8.cpu")


def execute_clear_screen(state: EmulatorState, instruction: ClearScreen) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=state.display.clear())


def execute_return(state: EmulatorState, instruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack, pc=int(state.pc))
    return state.replace(stack=stack, pc=address)


def execute_machine_call(state: EmulatorState, instruction: MachineCall) -> EmulatorState:
    """0NNN - Native routine call, ignored."""
    logger.warning(f"Ignoring machine code call 0x{instruction.raw:04X} at pc=0x{int(state.pc):03X}")
    return state


def execute_unknown(state: EmulatorState, instruction: Unknown) -> EmulatorState:
    """Unassigned opcode, executed as a no-op."""
    logger.warning(f"Unknown opcode 0x{instruction.raw:04X} at pc=0x{int(state.pc):03X}")
    return state

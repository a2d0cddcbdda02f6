"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chix8 import MachineConfig, create_state


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with the modern quirk preset."""
    return create_state(config=MachineConfig.preset("modern"))


@pytest.fixture
def legacy_state():
    """Provide a fresh state with the COSMAC VIP quirk preset."""
    return create_state(config=MachineConfig.preset("cosmac"))


def state_with(**quirks):
    """Helper to build a state with specific quirks enabled."""
    return create_state(config=MachineConfig(**quirks))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )

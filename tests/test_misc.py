"""Tests for miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
import pytest
from chix8 import MemoryAccessError, execute, press_key, step
from chix8.constants import FONT_DATA
from conftest import state_with


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state = fresh_state

        # Test FX15: Set delay timer
        state = execute(state, 0x6030)  # V0 = 48
        state = execute(state, 0xF015)  # Set delay timer to V0
        assert state.delay_timer == 48

        # Test FX18: Set sound timer
        state = execute(state, 0x6120)  # V1 = 32
        state = execute(state, 0xF118)  # Set sound timer to V1
        assert state.sound_timer == 32

        # Test FX07: Get delay timer
        state = execute(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48


class TestIndexAdd:
    """Test FX1E with and without the carry quirk."""

    def test_add_to_index(self, fresh_state):
        state = execute(fresh_state, 0xA100)
        state = execute(state, 0x6020)
        state = execute(state, 0xF01E)
        assert state.I == 0x120

    def test_wraps_without_touching_flag(self):
        state = state_with(index_add_carry=False)
        state = execute(state, 0xAFFF)
        state = execute(state, 0x6001)
        state = execute(state, 0x6F42)  # VF = 0x42
        state = execute(state, 0xF01E)

        assert state.I == 0x000
        assert state.V[15] == 0x42

    def test_overflow_sets_flag(self):
        state = state_with(index_add_carry=True)
        state = execute(state, 0xAFFF)
        state = execute(state, 0x6001)
        state = execute(state, 0xF01E)

        assert state.I == 0x000
        assert state.V[15] == 1

    def test_no_overflow_clears_flag(self):
        state = state_with(index_add_carry=True)
        state = execute(state, 0xAFF0)
        state = execute(state, 0x600F)
        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0xF01E)

        assert state.I == 0xFFF
        assert state.V[15] == 0

    def test_flag_register_as_operand(self):
        """FX1E with X = F adds the old VF before writing the flag."""
        state = state_with(index_add_carry=True)
        state = execute(state, 0xAFFE)
        state = execute(state, 0x6F05)
        state = execute(state, 0xFF1E)

        assert state.I == 0x003
        assert state.V[15] == 1


class TestBCD:
    """Test BCD conversion."""

    def test_misc_bcd_conversion(self, fresh_state):
        """Test BCD conversion with 156."""
        state = fresh_state

        state = execute(state, 0x609C)  # V0 = 156
        state = execute(state, 0xA300)  # I = 0x300
        state = execute(state, 0xF033)  # BCD conversion

        assert state.memory[0x300] == 1  # Hundreds
        assert state.memory[0x301] == 5  # Tens
        assert state.memory[0x302] == 6  # Ones
        assert state.I == 0x300

    def test_bcd_edge_cases(self, fresh_state):
        """Test BCD with edge cases."""
        state = fresh_state

        # Test with 0
        state = execute(state, 0x6000)  # V0 = 0
        state = execute(state, 0xA400)  # I = 0x400
        state = execute(state, 0xF033)  # BCD conversion

        assert state.memory[0x400] == 0  # Hundreds
        assert state.memory[0x401] == 0  # Tens
        assert state.memory[0x402] == 0  # Ones

        # Test with 255 (max)
        state = execute(state, 0x60FF)  # V0 = 255
        state = execute(state, 0xA500)  # I = 0x500
        state = execute(state, 0xF033)  # BCD conversion

        assert state.memory[0x500] == 2  # Hundreds
        assert state.memory[0x501] == 5  # Tens
        assert state.memory[0x502] == 5  # Ones

    def test_bcd_past_end_of_memory_faults(self, fresh_state):
        state = execute(fresh_state, 0xAFFE)
        with pytest.raises(MemoryAccessError):
            execute(state, 0xF033)


class TestFont:
    """Test font character addressing."""

    def test_misc_font_character(self, fresh_state):
        """Test font character addressing."""
        state = fresh_state

        # Test character 'A' (0xA)
        state = execute(state, 0x600A)  # V0 = 0xA
        state = execute(state, 0xF029)  # I = font address for A

        expected_address = 0x50 + (0xA * 5)  # 0x50 + 50 = 0x82
        assert state.I == expected_address

    @pytest.mark.parametrize("digit", range(16))
    def test_glyph_address_points_at_glyph(self, fresh_state, digit):
        state = execute(fresh_state, 0x6300 | digit)
        state = execute(state, 0xF329)

        address = int(state.I)
        assert address == 0x50 + 5 * digit
        assert [int(b) for b in state.memory[address:address + 5]] == list(FONT_DATA[5 * digit:5 * digit + 5])

    def test_custom_font_start(self):
        state = state_with(font_start=0x100)
        state = execute(state, 0x6003)
        state = execute(state, 0xF029)

        assert state.I == 0x10F
        assert [int(b) for b in state.memory[0x10F:0x114]] == list(FONT_DATA[15:20])

    def test_font_character_uses_low_nibble(self, fresh_state):
        state = execute(fresh_state, 0x6013)  # V0 = 0x13 → digit 3
        state = execute(state, 0xF029)
        assert state.I == 0x50 + 15


class TestRegisterStoreLoad:
    """Test FX55 / FX65 in both quirk modes."""

    def test_store_registers(self, modern_state):
        state = modern_state.replace(V=jnp.arange(16, dtype=jnp.uint8) + 0x10)
        state = execute(state, 0xA400)
        state = execute(state, 0xF355)  # Store V0..V3

        assert [int(b) for b in state.memory[0x400:0x405]] == [0x10, 0x11, 0x12, 0x13, 0x00]
        assert state.I == 0x400

    def test_load_registers(self, modern_state):
        state = modern_state.replace(
            memory=modern_state.memory.at[0x400:0x404].set(jnp.array([9, 8, 7, 6], dtype=jnp.uint8))
        )
        state = execute(state, 0xA400)
        state = execute(state, 0xF265)  # Load V0..V2

        assert [int(v) for v in state.V[:4]] == [9, 8, 7, 0]
        assert state.I == 0x400

    def test_store_registers_legacy_advances_index(self, legacy_state):
        state = execute(legacy_state, 0xA400)
        state = execute(state, 0xF355)
        assert state.I == 0x404

    def test_load_registers_legacy_advances_index(self, legacy_state):
        state = execute(legacy_state, 0xA400)
        state = execute(state, 0xFF65)  # All sixteen registers
        assert state.I == 0x410

    def test_store_then_load_roundtrip(self, fresh_state):
        values = jnp.array([3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5, 8, 9, 7, 9, 3], dtype=jnp.uint8)
        state = fresh_state.replace(V=values)
        state = execute(state, 0xA600)
        state = execute(state, 0xFF55)
        state = state.replace(V=jnp.zeros(16, dtype=jnp.uint8))
        state = execute(state, 0xFF65)

        assert jnp.array_equal(state.V, values)

    def test_store_past_end_of_memory_faults(self, fresh_state):
        state = execute(fresh_state, 0xAFFA)
        with pytest.raises(MemoryAccessError):
            execute(state, 0xFF55)

    def test_load_past_end_of_memory_faults(self, fresh_state):
        state = execute(fresh_state, 0xAFFA)
        with pytest.raises(MemoryAccessError):
            execute(state, 0xFF65)

        # Registers are untouched on the faulting state
        assert jnp.sum(state.V) == 0


class TestWaitForKey:
    """Test FX0A suspension."""

    def test_wait_suspends_execution(self, fresh_state):
        state = execute(fresh_state, 0xF30A)
        assert state.awaiting_key
        assert state.key_register == 3

        # Steps do nothing while waiting
        waiting_pc = state.pc
        state = step(state)
        state = step(state)
        assert state.pc == waiting_pc
        assert state.awaiting_key

    def test_key_press_resumes(self, fresh_state):
        state = execute(fresh_state, 0xF30A)
        state = press_key(state, 0xB)

        assert not state.awaiting_key
        assert state.V[3] == 0xB

    def test_held_key_needs_fresh_press(self, fresh_state):
        state = press_key(fresh_state, 5)
        state = execute(state, 0xF30A)

        state = press_key(state, 5)  # Still down, not a new press
        assert state.awaiting_key

        state = press_key(state, 6)
        assert not state.awaiting_key
        assert state.V[3] == 6

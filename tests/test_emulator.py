"""Tests for the fetch/step cycle, keypad, timers and frame runner."""

import jax.numpy as jnp
import pytest
from chix8 import (
    MemoryAccessError, StackUnderflowError, fetch, load_program, press_key,
    release_key, run, run_frame, set_keypad, sound_active, step, tick_timers,
)
from chix8.decode import decode


def program(*words):
    data = bytearray()
    for word in words:
        data += bytes([word >> 8, word & 0xFF])
    return bytes(data)


class TestFetch:

    def test_fetch_big_endian(self, fresh_state):
        state = load_program(fresh_state, program(0x6A12))
        state, instruction = fetch(state)
        assert instruction == 0x6A12
        assert state.pc == 0x202

    def test_fetch_past_memory_faults(self, fresh_state):
        state = fresh_state.replace(pc=jnp.asarray(0xFFF, dtype=jnp.uint16))
        with pytest.raises(MemoryAccessError):
            fetch(state)

    def test_fetch_last_word_wraps_pc(self, fresh_state):
        state = fresh_state.replace(pc=jnp.asarray(0xFFE, dtype=jnp.uint16))
        state, _ = fetch(state)
        assert state.pc == 0x000


class TestStep:

    def test_step_executes_program(self, fresh_state):
        state = load_program(fresh_state, program(0x6005, 0x6108, 0x8014))
        for _ in range(3):
            state = step(state)

        assert state.V[0] == 0x0D
        assert state.V[15] == 0
        assert state.pc == 0x206

    def test_skip_composes_with_fetch(self, fresh_state):
        state = load_program(fresh_state, program(0x3000, 0x6001, 0x6102))
        state = step(state)  # V0 == 0, skip next
        assert state.pc == 0x204
        state = step(state)
        assert state.V[0] == 0
        assert state.V[1] == 2

    def test_subroutine_round_trip(self, fresh_state):
        # 0x200: call 0x206; 0x202: V1 = 1; 0x204: jump 0x204; 0x206: V0 = 7; 0x208: return
        state = load_program(fresh_state, program(0x2206, 0x6101, 0x1204, 0x6007, 0x00EE))
        for _ in range(4):
            state = step(state)

        assert state.V[0] == 7
        assert state.V[1] == 1
        assert state.pc == 0x204

    def test_stray_return_faults(self, fresh_state):
        state = load_program(fresh_state, program(0x00EE))
        with pytest.raises(StackUnderflowError):
            step(state)

    def test_execute_accepts_decoded(self, fresh_state):
        from chix8 import execute
        state = execute(fresh_state, decode(0x6A55))
        assert state.V[0xA] == 0x55

    def test_wait_for_key_program(self, fresh_state):
        state = load_program(fresh_state, program(0xF50A, 0x7501))
        state = step(state)
        assert state.awaiting_key

        for _ in range(5):
            state = step(state)
        assert state.pc == 0x202

        state = press_key(state, 0x9)
        state = step(state)
        assert state.V[5] == 0x0A
        assert state.pc == 0x204


class TestKeypad:

    def test_press_and_release(self, fresh_state):
        state = press_key(fresh_state, 0xF)
        assert state.keypad[0xF]
        state = release_key(state, 0xF)
        assert not state.keypad[0xF]

    @pytest.mark.parametrize("key", [-1, 16])
    def test_invalid_key(self, fresh_state, key):
        with pytest.raises(ValueError):
            press_key(fresh_state, key)

    def test_set_keypad(self, fresh_state):
        keys = [False] * 16
        keys[2] = keys[9] = True
        state = set_keypad(fresh_state, keys)
        assert [int(k) for k in jnp.nonzero(state.keypad)[0]] == [2, 9]

    def test_set_keypad_wrong_length(self, fresh_state):
        with pytest.raises(ValueError):
            set_keypad(fresh_state, [True] * 8)

    def test_lowest_new_key_resolves_wait(self, fresh_state):
        state = fresh_state.replace(awaiting_key=True, key_register=4)
        keys = [False] * 16
        keys[12] = keys[3] = True
        state = set_keypad(state, keys)
        assert state.V[4] == 3
        assert not state.awaiting_key


class TestTimers:

    def test_tick_decrements(self, fresh_state):
        state = fresh_state.replace(
            delay_timer=jnp.asarray(3, dtype=jnp.uint8),
            sound_timer=jnp.asarray(1, dtype=jnp.uint8),
        )
        state = tick_timers(state)
        assert state.delay_timer == 2
        assert state.sound_timer == 0

    def test_tick_clamps_at_zero(self, fresh_state):
        state = tick_timers(tick_timers(fresh_state))
        assert state.delay_timer == 0
        assert state.sound_timer == 0

    def test_sound_active(self, fresh_state):
        assert not sound_active(fresh_state)
        state = fresh_state.replace(sound_timer=jnp.asarray(2, dtype=jnp.uint8))
        assert sound_active(state)
        assert not sound_active(tick_timers(tick_timers(state)))


class TestRunner:

    def test_run_frame(self, fresh_state):
        # Set delay timer to 10, then spin on a self jump
        state = load_program(fresh_state, program(0x600A, 0xF015, 0x1204))
        state = run_frame(state, instructions_per_frame=5)
        assert state.delay_timer == 9
        assert state.pc == 0x204

    def test_run_frames(self, fresh_state):
        state = load_program(fresh_state, program(0x600A, 0xF015, 0x1204))
        state = run(state, num_frames=4, instructions_per_frame=3)
        assert state.delay_timer == 6

    def test_timers_tick_while_waiting(self, fresh_state):
        state = fresh_state.replace(delay_timer=jnp.asarray(5, dtype=jnp.uint8))
        state = load_program(state, program(0xF00A))
        state = run(state, num_frames=2, instructions_per_frame=4)
        assert state.awaiting_key
        assert state.delay_timer == 3

"""Monochrome CHIP-8 display surface."""

import jax.numpy as jnp
import numpy as np
from flax.struct import PyTreeNode, field

from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT

_SPRITE_COLUMNS = jnp.arange(8)


class Display(PyTreeNode):
    """64x32 pixel buffer indexed as ``pixels[x, y]``."""
    pixels: jnp.ndarray = field(
        default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_)
    )

    def clear(self) -> "Display":
        """Turn every pixel off."""
        return self.replace(pixels=jnp.zeros_like(self.pixels))

    def draw_sprite(self, x: int, y: int, rows, clip: bool = False) -> tuple["Display", bool]:
        """XOR a sprite onto the buffer.

        Each entry of ``rows`` is one 8-pixel line, most significant bit on the
        left. The origin wraps around the screen. Pixels running past the right
        or bottom edge wrap as well, unless ``clip`` is set, in which case they
        are dropped.

        Args:
            x: Column of the sprite's top-left corner
            y: Row of the sprite's top-left corner
            rows: Sequence of sprite bytes
            clip: Drop off-screen pixels instead of wrapping them

        Returns:
            Tuple of (new display, whether any lit pixel was turned off)
        """
        rows = jnp.asarray(rows, dtype=jnp.uint8).reshape(-1)
        if rows.size == 0:
            return self, False

        x = int(x) % SCREEN_WIDTH
        y = int(y) % SCREEN_HEIGHT
        xs = x + _SPRITE_COLUMNS
        ys = y + jnp.arange(rows.shape[0])

        bits = (rows[:, None] >> (7 - _SPRITE_COLUMNS)[None, :]) & 1
        if clip:
            bits = bits * (xs < SCREEN_WIDTH)[None, :] * (ys < SCREEN_HEIGHT)[:, None]

        sprite = jnp.zeros(self.pixels.shape, dtype=jnp.uint8).at[
            (xs % SCREEN_WIDTH)[None, :], (ys % SCREEN_HEIGHT)[:, None]
        ].max(bits.astype(jnp.uint8))
        sprite = sprite.astype(jnp.bool_)

        collided = bool(jnp.any(self.pixels & sprite))
        return self.replace(pixels=self.pixels ^ sprite), collided

    def pixel(self, x: int, y: int) -> bool:
        return bool(self.pixels[x, y])

    def snapshot(self) -> np.ndarray:
        """Copy of the frame as a (64, 32) numpy bool array."""
        return np.array(self.pixels, dtype=np.bool_)

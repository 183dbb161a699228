"""Rendering into numpy RGB buffers."""

from flappy.graphics.renderer import FrameRenderer
from flappy.graphics.primitives import (
    new_buffer,
    draw_rect,
    draw_circle,
    draw_line,
)

__all__ = [
    "FrameRenderer",
    "new_buffer",
    "draw_rect",
    "draw_circle",
    "draw_line",
]

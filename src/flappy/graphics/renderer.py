"""Frame renderer: turns a FrameSnapshot into pixels."""

import math
import logging

import numpy as np
from numpy.typing import NDArray

from flappy.game.parallax import wrap_offset
from flappy.game.snapshot import FrameSnapshot
from flappy.graphics.primitives import (
    Color, new_buffer, draw_rect, draw_circle, draw_line
)

logger = logging.getLogger(__name__)

SKY_TOP: Color = (78, 192, 202)
SKY_BOTTOM: Color = (190, 232, 236)
HILL: Color = (94, 180, 110)
HILL_SHADE: Color = (76, 150, 92)
PIPE: Color = (46, 204, 113)
PIPE_RIM: Color = (30, 140, 76)
ACTOR: Color = (255, 159, 67)
ACTOR_EYE: Color = (20, 20, 20)
BEAK: Color = (230, 80, 40)


class FrameRenderer:
    """Draws the playfield into a numpy buffer sized to the viewport.

    The background is one procedurally generated tile repeated across
    the width and shifted by the parallax offset.
    """

    RIM_HEIGHT = 12
    RIM_OVERHANG = 4

    def __init__(self, tile_width: int = 240):
        self.tile_width = tile_width
        self._tile: NDArray[np.uint8] | None = None
        self._tile_height = 0

    def background_tile(self, height: int) -> NDArray[np.uint8]:
        """Sky gradient with rolling hills, cached per viewport height."""
        if self._tile is not None and self._tile_height == height:
            return self._tile

        t = np.linspace(0.0, 1.0, height)[:, None]
        top = np.array(SKY_TOP, dtype=np.float64)
        bottom = np.array(SKY_BOTTOM, dtype=np.float64)
        column = (top * (1 - t) + bottom * t).astype(np.uint8)
        tile = np.repeat(column[:, None, :], self.tile_width, axis=1)

        # One full sine period per tile keeps the seam invisible
        xs = np.arange(self.tile_width)
        crest = height * 0.78 + np.sin(xs / self.tile_width * 2 * math.pi) * height * 0.04
        rows = np.arange(height)[:, None]
        tile[rows >= crest[None, :]] = HILL
        tile[rows >= crest[None, :] + height * 0.08] = HILL_SHADE

        self._tile = tile
        self._tile_height = height
        logger.debug(f"Background tile built: {self.tile_width}x{height}")
        return tile

    def render(self, snapshot: FrameSnapshot) -> NDArray[np.uint8]:
        """Render one frame. Returns a (height, width, 3) uint8 array."""
        width, height = snapshot.viewport_width, snapshot.viewport_height
        buffer = new_buffer(width, height)
        if width == 0 or height == 0:
            return buffer

        self._draw_background(buffer, snapshot)
        self._draw_obstacles(buffer, snapshot)
        self._draw_actor(buffer, snapshot)
        return buffer

    def _draw_background(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        height, width = buffer.shape[:2]
        tile = self.background_tile(height)

        x = int(wrap_offset(snapshot.parallax_offset, self.tile_width))
        while x < width:
            src_x1 = max(0, -x)
            dst_x1 = max(0, x)
            span = min(self.tile_width - src_x1, width - dst_x1)
            if span > 0:
                buffer[:, dst_x1:dst_x1 + span] = tile[:, src_x1:src_x1 + span]
            x += self.tile_width

    def _draw_obstacles(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        height = snapshot.viewport_height
        pipe_w = snapshot.obstacle_width
        for pipe in snapshot.obstacles:
            gap_bottom = pipe.gap_top + snapshot.gap_height

            draw_rect(buffer, pipe.x, 0, pipe_w, pipe.gap_top, PIPE)
            draw_rect(buffer, pipe.x, gap_bottom, pipe_w, height - gap_bottom, PIPE)

            # Rims facing the gap
            rim_x = pipe.x - self.RIM_OVERHANG
            rim_w = pipe_w + 2 * self.RIM_OVERHANG
            draw_rect(buffer, rim_x, pipe.gap_top - self.RIM_HEIGHT, rim_w, self.RIM_HEIGHT, PIPE_RIM)
            draw_rect(buffer, rim_x, gap_bottom, rim_w, self.RIM_HEIGHT, PIPE_RIM)

    def _draw_actor(self, buffer: NDArray[np.uint8], snapshot: FrameSnapshot) -> None:
        actor = snapshot.actor
        cos_t, sin_t = math.cos(actor.tilt), math.sin(actor.tilt)

        draw_circle(buffer, actor.x, actor.y, actor.radius, ACTOR)

        # Beak and eye rotate with the tilt
        tip = actor.radius + 8
        draw_line(
            buffer,
            int(actor.x + cos_t * actor.radius * 0.6), int(actor.y + sin_t * actor.radius * 0.6),
            int(actor.x + cos_t * tip), int(actor.y + sin_t * tip),
            BEAK, thickness=4,
        )
        eye_x = actor.x + (cos_t * 0.4 + sin_t * 0.4) * actor.radius
        eye_y = actor.y + (sin_t * 0.4 - cos_t * 0.4) * actor.radius
        draw_circle(buffer, eye_x, eye_y, max(actor.radius * 0.18, 1.5), ACTOR_EYE)

"""Cosmetic background scroll."""

from flappy.config.settings import ParallaxSettings


def wrap_offset(offset: float, tile_width: float) -> float:
    """Fold an unbounded offset into ``(-tile_width, 0]`` for seamless tiling."""
    if tile_width <= 0:
        return 0.0
    draw_x = offset % tile_width
    if draw_x > 0:
        draw_x -= tile_width
    return draw_x


class ParallaxLayer:
    """Background offset that only ever moves left.

    Once the renderer supplies its background tile width the offset is
    kept wrapped into ``(-tile_width, 0]``; until then it is unbounded.
    """

    def __init__(self, settings: ParallaxSettings | None = None, tile_width: float | None = None):
        self.settings = settings or ParallaxSettings()
        self.tile_width = tile_width
        self.offset = 0.0

    def update(self) -> None:
        self.offset -= self.settings.speed
        if self.tile_width:
            self.offset = wrap_offset(self.offset, self.tile_width)

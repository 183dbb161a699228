"""Scrolling obstacle-pairs: spawn, advance, score, collide, prune."""

import math
import random
import logging
from dataclasses import dataclass

from flappy.config.settings import ObstacleSettings
from flappy.game.actor import Actor

logger = logging.getLogger(__name__)


@dataclass
class ObstaclePair:
    """Top and bottom column sharing one vertical gap.

    The gap spans ``gap_top`` to ``gap_top + gap_height``.
    """
    x: float
    gap_top: float
    passed: bool = False


@dataclass
class FieldUpdate:
    """Outcome of one ObstacleField tick."""
    spawned: ObstaclePair | None = None
    passed: int = 0
    collided: bool = False
    pruned: int = 0


class ObstacleField:
    """Ordered (oldest first) sequence of obstacle-pairs."""

    def __init__(
        self,
        settings: ObstacleSettings | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or ObstacleSettings()
        self._rng = rng or random.Random()
        self._pairs: list[ObstaclePair] = []

    @property
    def pairs(self) -> list[ObstaclePair]:
        return self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def clear(self) -> None:
        self._pairs.clear()

    def gap_range(self, viewport_height: float) -> tuple[int, int] | None:
        """Inclusive range of legal gap tops, or None if the viewport is too short."""
        low = self.settings.min_segment_length
        high = math.floor(viewport_height - self.settings.min_segment_length - self.settings.gap_height)
        if high < low:
            return None
        return low, high

    def spawn(self, viewport_width: float, viewport_height: float) -> ObstaclePair | None:
        """Append a new pair at the right edge. Skipped if no gap fits."""
        bounds = self.gap_range(viewport_height)
        if bounds is None:
            logger.debug(f"Spawn skipped: viewport height {viewport_height} too short")
            return None

        pair = ObstaclePair(x=float(viewport_width), gap_top=float(self._rng.randint(*bounds)))
        self._pairs.append(pair)
        logger.debug(f"Spawned pair at x={pair.x:.0f} gap_top={pair.gap_top:.0f}")
        return pair

    def overlaps(self, pair: ObstaclePair, actor: Actor) -> bool:
        """True if the actor's horizontal span intersects the pair's columns."""
        return (
            actor.x + actor.radius > pair.x
            and actor.x - actor.radius < pair.x + self.settings.width
        )

    def hits(self, pair: ObstaclePair, actor: Actor) -> bool:
        """True if the actor touches either column of the pair."""
        if not self.overlaps(pair, actor):
            return False
        gap_bottom = pair.gap_top + self.settings.gap_height
        return actor.top < pair.gap_top or actor.bottom > gap_bottom

    def update(
        self,
        actor: Actor,
        viewport_width: float,
        viewport_height: float,
        tick_count: int,
    ) -> FieldUpdate:
        """Run one active tick against the current viewport."""
        result = FieldUpdate()

        if tick_count % self.settings.spawn_interval == 0:
            result.spawned = self.spawn(viewport_width, viewport_height)

        for pair in self._pairs:
            pair.x -= self.settings.speed

        for pair in self._pairs:
            if not pair.passed and pair.x + self.settings.width < actor.x:
                pair.passed = True
                result.passed += 1

        result.collided = any(self.hits(pair, actor) for pair in self._pairs)

        # Pairs leave in spawn order, so the survivors keep theirs
        before = len(self._pairs)
        self._pairs = [p for p in self._pairs if p.x + self.settings.width >= 0]
        result.pruned = before - len(self._pairs)
        if result.pruned:
            logger.debug(f"Pruned {result.pruned} pair(s), {len(self._pairs)} live")

        return result

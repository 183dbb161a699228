"""Read-only views of the simulation handed to the presentation layer."""

from dataclasses import dataclass
from enum import Enum, auto

from flappy.core.state import State


class Overlay(Enum):
    """Screen shown on top of the playfield."""
    START = auto()
    HUD = auto()
    GAME_OVER = auto()


# The overlay is a pure function of the session state
OVERLAY_FOR_STATE = {
    State.IDLE: Overlay.START,
    State.ACTIVE: Overlay.HUD,
    State.TERMINAL: Overlay.GAME_OVER,
}


@dataclass(frozen=True)
class ActorView:
    x: float
    y: float
    tilt: float
    radius: float


@dataclass(frozen=True)
class ObstacleView:
    x: float
    gap_top: float


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a renderer needs to draw one frame."""
    state: State
    score: int
    best_score: int
    tick_count: int
    actor: ActorView
    obstacles: tuple[ObstacleView, ...]
    parallax_offset: float
    viewport_width: int
    viewport_height: int
    obstacle_width: float
    gap_height: float

    @property
    def overlay(self) -> Overlay:
        return OVERLAY_FOR_STATE[self.state]

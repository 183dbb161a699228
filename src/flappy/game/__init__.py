"""Simulation: actor, obstacle field, parallax and the session controller."""

from flappy.game.actor import Actor
from flappy.game.obstacles import ObstacleField, ObstaclePair, FieldUpdate
from flappy.game.parallax import ParallaxLayer
from flappy.game.session import SessionController
from flappy.game.snapshot import FrameSnapshot, ActorView, ObstacleView, Overlay

__all__ = [
    "Actor",
    "ObstacleField",
    "ObstaclePair",
    "FieldUpdate",
    "ParallaxLayer",
    "SessionController",
    "FrameSnapshot",
    "ActorView",
    "ObstacleView",
    "Overlay",
]

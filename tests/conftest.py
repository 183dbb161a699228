"""Shared fixtures."""

import random

import pytest

from flappy.config.settings import Settings
from flappy.core.events import EventBus
from flappy.core.state import State
from flappy.game.session import SessionController
from flappy.game.snapshot import ActorView, FrameSnapshot
from flappy.storage.best_score import BestScoreStore


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, data_path=tmp_path, seed=7)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store(settings):
    return BestScoreStore(settings.best_score_path)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def controller(settings, bus, store):
    return SessionController(settings=settings, event_bus=bus, store=store)


@pytest.fixture
def make_snapshot():
    """Build a FrameSnapshot with sensible defaults."""
    def factory(**overrides) -> FrameSnapshot:
        values = dict(
            state=State.IDLE,
            score=0,
            best_score=0,
            tick_count=0,
            actor=ActorView(x=50.0, y=150.0, tilt=0.0, radius=15.0),
            obstacles=(),
            parallax_offset=0.0,
            viewport_width=480,
            viewport_height=640,
            obstacle_width=60.0,
            gap_height=170.0,
        )
        values.update(overrides)
        return FrameSnapshot(**values)

    return factory

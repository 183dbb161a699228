"""Session controller: lifecycle, score, and the per-tick dispatch."""

import logging
import random

from flappy.config.settings import Settings
from flappy.core.events import Event, EventBus, EventType
from flappy.core.state import State, StateMachine
from flappy.game.actor import Actor
from flappy.game.obstacles import ObstacleField
from flappy.game.parallax import ParallaxLayer
from flappy.game.snapshot import ActorView, FrameSnapshot, ObstacleView
from flappy.storage.best_score import BestScoreStore

logger = logging.getLogger(__name__)


class SessionController:
    """Owns the game lifecycle and everything it gates.

    Each tick the parallax layer always advances. The actor bobs while
    IDLE; while ACTIVE the actor integrates, the obstacle field updates
    and the tick counter increments. TERMINAL freezes both until a
    restart returns the session to IDLE.

    Input is applied through flap(), start() and restart(), either
    directly or from events on an attached EventBus.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
        store: BestScoreStore | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or Settings()
        self.state_machine = StateMachine()
        self.actor = Actor(self.settings.physics)
        self.field = ObstacleField(self.settings.obstacles, rng or random.Random(self.settings.seed))
        self.parallax = ParallaxLayer(self.settings.parallax)

        self.score = 0
        self.tick_count = 0
        self._store = store
        self.best_score = store.load() if store else 0

        self.viewport_width = self.settings.display.width
        self.viewport_height = self.settings.display.height
        self._elapsed = 0.0  # seconds, drives the idle bob

        self._event_bus: EventBus | None = None
        self._unsubscribers: list = []
        self.state_machine.add_listener(self._on_state_changed)

        if event_bus is not None:
            self.attach(event_bus)

    @property
    def state(self) -> State:
        return self.state_machine.state

    # Event wiring
    def attach(self, event_bus: EventBus) -> None:
        """Consume input and tick events from the bus and publish session events."""
        self.detach()
        self._event_bus = event_bus
        self._unsubscribers = [
            event_bus.subscribe(EventType.FLAP, lambda e: self.flap()),
            event_bus.subscribe(EventType.START_REQUESTED, lambda e: self.start()),
            event_bus.subscribe(EventType.RESTART_REQUESTED, lambda e: self.restart()),
            event_bus.subscribe(EventType.VIEWPORT_RESIZED, self._on_resize),
            event_bus.subscribe(EventType.TICK, self._on_tick),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._event_bus = None

    def _emit(self, event_type: EventType, **data) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(Event(event_type, data=data, source="session"))

    def _on_state_changed(self, old: State, new: State) -> None:
        self._emit(EventType.STATE_CHANGED, old=old, new=new)

    def _on_resize(self, event: Event) -> None:
        self.resize(event.data.get("width", 0), event.data.get("height", 0))

    def _on_tick(self, event: Event) -> None:
        self.update(event.data.get("delta", 0.0) * 1000.0)

    # Input
    def flap(self) -> None:
        """Flap while playing; starts the run from IDLE; ignored when over."""
        if self.state == State.ACTIVE:
            self.actor.apply_impulse()
        elif self.state == State.IDLE:
            self.start()

    def start(self) -> bool:
        """IDLE -> ACTIVE with one immediate impulse."""
        if not self.state_machine.transition(State.ACTIVE):
            return False
        self.actor.apply_impulse()
        return True

    def restart(self) -> bool:
        """TERMINAL -> IDLE, clearing the finished run."""
        if self.state != State.TERMINAL:
            logger.debug(f"Restart ignored in {self.state.name}")
            return False

        self.actor.reset()
        self.field.clear()
        self.score = 0
        self.tick_count = 0
        self._emit(EventType.SCORE_CHANGED, score=0)
        return self.state_machine.transition(State.IDLE)

    def resize(self, width: int, height: int) -> None:
        """Adopt a new viewport size; used from the next tick on."""
        if width <= 0 or height <= 0:
            logger.warning(f"Ignoring invalid viewport size {width}x{height}")
            return
        self.viewport_width = int(width)
        self.viewport_height = int(height)
        logger.debug(f"Viewport resized to {width}x{height}")

    # Simulation
    def update(self, delta_ms: float = 0.0) -> None:
        """Run one tick.

        Args:
            delta_ms: Wall time since the previous tick; only the idle bob
                uses it, physics is fixed-step.
        """
        self._elapsed += delta_ms / 1000.0
        self.parallax.update()

        if self.state == State.IDLE:
            self.actor.idle_bob(self._elapsed)
        elif self.state == State.ACTIVE:
            self._step()

    def _step(self) -> None:
        hit_floor = self.actor.integrate(self.viewport_height)
        result = self.field.update(
            self.actor, self.viewport_width, self.viewport_height, self.tick_count
        )
        self.tick_count += 1

        if result.passed:
            self.score += result.passed
            self._emit(EventType.SCORE_CHANGED, score=self.score)

        if hit_floor or result.collided:
            self._end_run("floor" if hit_floor else "obstacle")

    def _end_run(self, cause: str) -> None:
        if not self.state_machine.transition(State.TERMINAL):
            return
        logger.info(f"Run over ({cause}) with score {self.score}")

        if self.score > self.best_score:
            self.best_score = self.score
            logger.info(f"New best score: {self.best_score}")
            if self._store is not None:
                self._store.save(self.best_score)
            self._emit(EventType.NEW_BEST_SCORE, best_score=self.best_score)

    def snapshot(self) -> FrameSnapshot:
        """Immutable view of the current frame for the renderer."""
        return FrameSnapshot(
            state=self.state,
            score=self.score,
            best_score=self.best_score,
            tick_count=self.tick_count,
            actor=ActorView(
                x=self.actor.x,
                y=self.actor.y,
                tilt=self.actor.tilt,
                radius=self.actor.radius,
            ),
            obstacles=tuple(ObstacleView(p.x, p.gap_top) for p in self.field.pairs),
            parallax_offset=self.parallax.offset,
            viewport_width=self.viewport_width,
            viewport_height=self.viewport_height,
            obstacle_width=self.settings.obstacles.width,
            gap_height=self.settings.obstacles.gap_height,
        )

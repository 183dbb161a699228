"""
Session lifecycle state machine.

States:
    IDLE: Waiting for the player (actor bobs, background scrolls)
    ACTIVE: A run is in progress
    TERMINAL: The run ended on a collision; waiting for restart
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Session states."""
    IDLE = auto()
    ACTIVE = auto()
    TERMINAL = auto()


StateListener = Callable[[State, State], None]


class StateMachine:
    """
    Owns the session state and guards its transitions.

    Only the three lifecycle edges are legal. Listeners are notified
    after every successful transition.
    """

    # Valid state transitions
    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.IDLE, State.ACTIVE),      # Start
        (State.ACTIVE, State.TERMINAL),  # Collision
        (State.TERMINAL, State.IDLE),    # Restart
    ]

    def __init__(self, initial_state: State = State.IDLE) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, old_state: State, new_state: State) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

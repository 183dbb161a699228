"""The falling, flapping actor."""

import math
import logging

from flappy.config.settings import PhysicsSettings

logger = logging.getLogger(__name__)


class Actor:
    """Player-controlled disc that falls under gravity.

    Horizontal position is fixed; only ``y``, ``velocity`` and ``tilt``
    change. Positive velocity points down the screen, negative tilt is
    nose-up.
    """

    def __init__(self, physics: PhysicsSettings | None = None):
        self.physics = physics or PhysicsSettings()
        self.x = self.physics.actor_x
        self.radius = self.physics.actor_radius
        self.y = self.physics.actor_rest_y
        self.velocity = 0.0
        self.tilt = 0.0

    def reset(self) -> None:
        """Return to the rest position, motionless and level."""
        self.y = self.physics.actor_rest_y
        self.velocity = 0.0
        self.tilt = 0.0

    def apply_impulse(self) -> None:
        """Flap: replace the vertical velocity with the upward kick."""
        self.velocity = self.physics.flap_velocity
        self.tilt = self.physics.nose_up_angle

    def integrate(self, floor_y: float) -> bool:
        """Advance one tick of gravity.

        Args:
            floor_y: Current floor line (viewport height)

        Returns:
            True if the actor touched the floor this tick
        """
        self.velocity += self.physics.gravity
        self.y += self.velocity

        if self.velocity < 0:
            self.tilt = self.physics.nose_up_angle
        else:
            self.tilt = min(
                self.tilt + self.physics.tilt_step,
                self.physics.max_nose_down_angle,
            )

        if self.y + self.radius >= floor_y:
            self.y = floor_y - self.radius
            return True
        return False

    def idle_bob(self, elapsed_seconds: float) -> None:
        """Hover around the rest position while waiting for the player."""
        self.y = bob_offset(elapsed_seconds, self.physics) + self.physics.actor_rest_y

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius


def bob_offset(elapsed_seconds: float, physics: PhysicsSettings) -> float:
    """Sinusoidal idle offset for a given elapsed time."""
    elapsed_ms = elapsed_seconds * 1000.0
    return math.sin(elapsed_ms / physics.bob_period_ms) * physics.bob_amplitude

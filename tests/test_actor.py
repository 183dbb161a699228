"""Tests for actor physics."""

import math

import pytest

from flappy.config.settings import PhysicsSettings
from flappy.game.actor import Actor, bob_offset


@pytest.fixture
def actor():
    return Actor(PhysicsSettings())


def test_starts_at_rest(actor):
    assert actor.x == 50.0
    assert actor.y == 150.0
    assert actor.velocity == 0.0
    assert actor.tilt == 0.0
    assert actor.radius == 15.0


def test_impulse_sets_upward_velocity_and_nose_up(actor):
    actor.velocity = 3.0
    actor.apply_impulse()
    assert actor.velocity == -4.5
    assert actor.tilt == pytest.approx(math.radians(-25))


def test_impulse_is_repeatable(actor):
    actor.apply_impulse()
    actor.apply_impulse()
    assert actor.velocity == -4.5


def test_integrate_applies_gravity(actor):
    hit = actor.integrate(floor_y=640)
    assert not hit
    assert actor.velocity == pytest.approx(0.25)
    assert actor.y == pytest.approx(150.25)


def test_rising_snaps_nose_up(actor):
    actor.tilt = 1.0
    actor.apply_impulse()
    actor.integrate(floor_y=640)
    assert actor.velocity < 0
    assert actor.tilt == pytest.approx(math.radians(-25))


def test_falling_tilt_is_monotonic_and_clamped(actor):
    previous = actor.tilt
    for _ in range(200):
        actor.integrate(floor_y=1e9)
        assert actor.tilt >= previous
        previous = actor.tilt
    assert actor.tilt == pytest.approx(math.radians(90))


def test_floor_contact_clamps_and_signals(actor):
    actor.y = 630.0
    assert actor.integrate(floor_y=640)
    assert actor.y == 625.0


def test_just_above_floor_is_not_contact(actor):
    actor.y = 620.0
    assert not actor.integrate(floor_y=640)
    assert actor.y == pytest.approx(620.25)


def test_idle_bob_is_sinusoidal_around_rest(actor):
    actor.velocity = 2.0
    actor.idle_bob(0.0)
    assert actor.y == pytest.approx(150.0)

    quarter_period = 0.3 * math.pi / 2
    actor.idle_bob(quarter_period)
    assert actor.y == pytest.approx(155.0)
    assert actor.velocity == 2.0


def test_bob_offset_stays_within_amplitude():
    physics = PhysicsSettings()
    for step in range(100):
        assert abs(bob_offset(step * 0.037, physics)) <= physics.bob_amplitude


def test_reset(actor):
    actor.apply_impulse()
    actor.integrate(floor_y=640)
    actor.reset()
    assert (actor.y, actor.velocity, actor.tilt) == (150.0, 0.0, 0.0)

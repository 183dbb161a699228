"""Tests for the session lifecycle and per-tick dispatch."""

import asyncio
import json
import math

import pytest

from flappy.core.events import EventType, flap_event, resize_event, restart_event, start_event, tick_event
from flappy.core.state import State
from flappy.game.obstacles import ObstaclePair
from flappy.game.session import SessionController
from flappy.game.snapshot import Overlay
from flappy.storage.best_score import BestScoreStore


def run_until_terminal(controller, limit=1000):
    for _ in range(limit):
        controller.update(16.0)
        if controller.state != State.ACTIVE:
            return
    raise AssertionError("run never ended")


def test_idle_runs_no_gameplay(controller):
    for _ in range(300):
        controller.update(16.0)

    assert controller.state == State.IDLE
    assert controller.score == 0
    assert controller.tick_count == 0
    assert len(controller.field) == 0
    assert controller.actor.velocity == 0.0


def test_idle_bobs_and_scrolls(controller):
    controller.update(300 * math.pi / 2)
    assert controller.actor.y == pytest.approx(155.0)
    assert controller.parallax.offset == pytest.approx(-1.0)


def test_flap_in_idle_starts_with_impulse(controller):
    controller.flap()
    assert controller.state == State.ACTIVE
    assert controller.actor.velocity == -4.5


def test_start_only_from_idle(controller):
    assert controller.start()
    assert not controller.start()
    assert controller.state == State.ACTIVE


def test_gravity_per_active_tick(controller):
    controller.start()
    for _ in range(10):
        before = controller.actor.velocity
        controller.update(16.0)
        assert controller.actor.velocity - before == pytest.approx(0.25)


def test_flap_overrides_gravity_for_that_tick(controller):
    controller.start()
    controller.update(16.0)
    controller.flap()
    assert controller.actor.velocity == -4.5
    controller.update(16.0)
    assert controller.actor.velocity == pytest.approx(-4.25)


def test_active_ticks_count_and_spawn(controller):
    controller.start()
    controller.update(16.0)
    assert controller.tick_count == 1
    assert len(controller.field) == 1


def test_floor_contact_ends_run(controller):
    controller.start()
    run_until_terminal(controller)

    assert controller.state == State.TERMINAL
    assert controller.actor.y == controller.viewport_height - controller.actor.radius


def test_obstacle_contact_ends_run(controller):
    controller.start()
    controller.field.pairs.append(ObstaclePair(x=30.0, gap_top=400.0))

    controller.update(16.0)
    assert controller.state == State.TERMINAL


def test_terminal_freezes_gameplay_but_not_parallax(controller):
    controller.start()
    controller.field.pairs.append(ObstaclePair(x=30.0, gap_top=400.0))
    controller.update(16.0)

    y, ticks = controller.actor.y, controller.tick_count
    xs = [p.x for p in controller.field.pairs]
    offset = controller.parallax.offset

    for _ in range(5):
        controller.update(16.0)
    controller.flap()

    assert controller.state == State.TERMINAL
    assert controller.actor.y == y
    assert controller.tick_count == ticks
    assert [p.x for p in controller.field.pairs] == xs
    assert controller.parallax.offset == pytest.approx(offset - 5)


def test_passing_a_pair_scores_once(controller, bus):
    controller.start()
    # gap 60..230 holds the actor on its first active tick
    controller.field.pairs.append(ObstaclePair(x=-10.0, gap_top=60.0))

    controller.update(16.0)
    controller.update(16.0)

    assert controller.state == State.ACTIVE
    assert controller.score == 1
    scores = [e.data["score"] for e in bus.get_history(EventType.SCORE_CHANGED)]
    assert scores == [1]


def test_pair_passed_on_the_final_tick_still_counts(controller, store):
    controller.start()
    controller.actor.y = 624.0
    controller.actor.velocity = 5.0
    # right edge lands at 30 after advancing: passed, and clear of the actor
    controller.field.pairs.append(ObstaclePair(x=-27.5, gap_top=60.0))

    controller.update(16.0)

    assert controller.state == State.TERMINAL
    assert controller.actor.y == controller.viewport_height - controller.actor.radius
    assert controller.score == 1
    assert controller.best_score == 1
    assert store.load() == 1


def test_new_record_is_kept_and_persisted(settings, bus, store):
    store.save(3)
    controller = SessionController(settings=settings, event_bus=bus, store=store)
    assert controller.best_score == 3

    controller.start()
    controller.score = 7
    controller.field.pairs.append(ObstaclePair(x=30.0, gap_top=400.0))
    controller.update(16.0)

    assert controller.state == State.TERMINAL
    assert controller.best_score == 7
    assert json.loads(settings.best_score_path.read_text()) == {"best_score": 7}
    assert bus.get_history(EventType.NEW_BEST_SCORE)[-1].data == {"best_score": 7}

    assert controller.restart()
    assert controller.score == 0
    assert controller.best_score == 7
    assert controller.state == State.IDLE


def test_lower_score_keeps_record(settings, bus, store):
    store.save(10)
    controller = SessionController(settings=settings, event_bus=bus, store=store)

    controller.start()
    controller.score = 2
    controller.field.pairs.append(ObstaclePair(x=30.0, gap_top=400.0))
    controller.update(16.0)

    assert controller.best_score == 10
    assert store.load() == 10
    assert bus.get_history(EventType.NEW_BEST_SCORE) == []


def test_restart_only_from_terminal(controller):
    assert not controller.restart()
    controller.start()
    assert not controller.restart()
    assert controller.state == State.ACTIVE


def test_restart_resets_the_run(controller):
    controller.start()
    run_until_terminal(controller)
    controller.restart()

    assert controller.state == State.IDLE
    assert controller.tick_count == 0
    assert controller.score == 0
    assert len(controller.field) == 0
    assert controller.actor.y == 150.0
    assert controller.actor.velocity == 0.0
    assert controller.actor.tilt == 0.0


def test_resize_applies_to_the_next_tick(controller):
    controller.resize(1000, 700)
    controller.start()
    controller.update(16.0)

    assert controller.field.pairs[0].x == pytest.approx(997.5)


def test_invalid_resize_is_ignored(controller):
    controller.resize(0, -5)
    assert (controller.viewport_width, controller.viewport_height) == (480, 640)


def test_driven_through_the_bus(controller, bus):
    bus.queue_event(resize_event(800, 600))
    bus.queue_event(start_event())
    asyncio.run(bus.process_queue())

    assert controller.state == State.ACTIVE
    assert controller.viewport_width == 800

    bus.emit(tick_event(0.016, 0))
    assert controller.tick_count == 1

    bus.emit(flap_event())
    assert controller.actor.velocity == -4.5

    transitions = [(e.data["old"], e.data["new"]) for e in bus.get_history(EventType.STATE_CHANGED)]
    assert transitions == [(State.IDLE, State.ACTIVE)]


def test_detach_stops_consuming_events(controller, bus):
    controller.detach()
    bus.emit(start_event())
    assert controller.state == State.IDLE


def test_restart_event(controller, bus):
    controller.start()
    run_until_terminal(controller)
    bus.emit(restart_event())
    assert controller.state == State.IDLE


def test_without_store_best_score_starts_at_zero(settings):
    controller = SessionController(settings=settings)
    assert controller.best_score == 0


def test_corrupt_store_reads_as_zero(settings):
    settings.best_score_path.write_text("{not json")
    controller = SessionController(settings=settings, store=BestScoreStore(settings.best_score_path))
    assert controller.best_score == 0


def test_snapshot_reflects_state(controller):
    controller.start()
    controller.update(16.0)
    snap = controller.snapshot()

    assert snap.state == State.ACTIVE
    assert snap.overlay == Overlay.HUD
    assert snap.tick_count == 1
    assert snap.actor.y == controller.actor.y
    assert snap.actor.tilt == controller.actor.tilt
    assert [(o.x, o.gap_top) for o in snap.obstacles] == [
        (p.x, p.gap_top) for p in controller.field.pairs
    ]
    assert snap.parallax_offset == controller.parallax.offset
    assert (snap.viewport_width, snap.viewport_height) == (480, 640)
    assert snap.obstacle_width == 60.0
    assert snap.gap_height == 170.0


def test_seeded_sessions_are_reproducible(settings):
    gaps = []
    for _ in range(2):
        controller = SessionController(settings=settings)
        controller.start()
        controller.update(16.0)
        gaps.append(controller.field.pairs[0].gap_top)
    assert gaps[0] == gaps[1]

import pytest
from pygame.math import Vector2

from spacebreak.engine.actor import Actor, ActorEvent, CircleActor, CollisionType
from spacebreak.graphics.primitives import new_buffer


def test_bounds_are_center_anchored():
    actor = Actor(50, 40, 20, 10)

    assert (actor.left, actor.right) == (40, 60)
    assert (actor.top, actor.bottom) == (35, 45)


def test_velocity_is_copied():
    shared = Vector2(100, 0)
    a = Actor(0, 0, 10, 10, vel=shared)
    b = Actor(0, 0, 10, 10, vel=shared)

    a.vel.x *= -1

    assert b.vel.x == 100
    assert shared.x == 100


def test_update_integrates_in_seconds():
    actor = Actor(0, 0, 10, 10, vel=(200, -100))
    actor.update(500)

    assert actor.pos == Vector2(100, -50)


def test_intersection_is_minimum_translation():
    a = Actor(0, 0, 10, 10)
    b = Actor(8, 0, 10, 10)

    assert a.intersection(b) == Vector2(-2, 0)
    assert b.intersection(a) == Vector2(2, 0)


def test_intersection_picks_the_shallow_axis():
    a = Actor(0, 0, 40, 10)
    b = Actor(5, 7, 40, 10)

    assert a.intersection(b) == Vector2(0, -3)


def test_touching_edges_do_not_overlap():
    a = Actor(0, 0, 10, 10)
    b = Actor(10, 0, 10, 10)

    assert not a.overlaps(b)
    assert a.intersection(b) is None


def test_kill_fires_once():
    actor = Actor(0, 0, 10, 10)
    kills = []
    actor.on(ActorEvent.KILL, kills.append)

    actor.kill()
    actor.kill()

    assert actor.is_killed
    assert len(kills) == 1
    assert kills[0].actor is actor


def test_handlers_accept_event_names_and_can_be_detached():
    actor = Actor(0, 0, 10, 10)
    calls = []
    off = actor.on("postupdate", calls.append)

    actor.emit(ActorEvent.POSTUPDATE, "first")
    off()
    actor.emit(ActorEvent.POSTUPDATE, "second")

    assert calls == ["first"]


def test_unknown_event_name_is_rejected():
    with pytest.raises(ValueError):
        Actor(0, 0, 1, 1).on("explode", print)


def test_handler_errors_propagate():
    actor = Actor(0, 0, 10, 10)

    def broken(event):
        raise RuntimeError("boom")

    actor.on(ActorEvent.POSTUPDATE, broken)
    with pytest.raises(RuntimeError):
        actor.emit(ActorEvent.POSTUPDATE, None)


def test_default_collision_type_is_prevent():
    assert Actor(0, 0, 1, 1).collision_type == CollisionType.PREVENT


def test_rect_and_circle_drawing():
    buffer = new_buffer(50, 50)
    Actor(10, 10, 10, 10, color=(0, 255, 0)).draw(buffer)
    ball = CircleActor(35, 35, 5, color=(255, 0, 255))
    ball.draw(buffer)

    assert (ball.width, ball.height) == (10, 10)
    assert tuple(buffer[10, 10]) == (0, 255, 0)
    assert tuple(buffer[5, 5]) == (0, 255, 0)
    assert tuple(buffer[35, 35]) == (255, 0, 255)
    # Circle corners stay empty
    assert tuple(buffer[30, 30]) == (0, 0, 0)

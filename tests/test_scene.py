import pytest
from pygame.math import Vector2

from spacebreak.engine.actor import Actor, ActorEvent, CollisionType
from spacebreak.engine.scene import Scene
from spacebreak.graphics.primitives import new_buffer


@pytest.fixture
def scene():
    return Scene(100, 100, background=(10, 20, 30))


def box(x, y, size=20, kind=CollisionType.ACTIVE, **kwargs):
    return Actor(x, y, size, size, collision_type=kind, **kwargs)


def record(actor, log, *events):
    for event in events:
        actor.on(event, lambda payload, event=event: log.append((actor.name, event)))


def test_add_is_idempotent_and_remove_tolerant(scene):
    actor = box(50, 50)
    scene.add(actor)
    scene.add(actor)
    scene.remove(box(0, 0))

    assert len(scene) == 1
    assert actor in scene

    scene.remove(actor)
    assert len(scene) == 0


def test_step_order(scene):
    log = []
    mover = box(50, 50, name="mover", vel=(0, 100))
    wall = box(50, 75, kind=CollisionType.FIXED, name="wall")
    leaver = box(50, 95, size=10, name="leaver", vel=(0, 100))
    for actor in (mover, wall, leaver):
        scene.add(actor)
        record(actor, log, ActorEvent.PRECOLLISION, ActorEvent.POSTUPDATE, ActorEvent.EXIT_VIEWPORT)

    scene.update(100)

    # Positions were integrated before contacts were looked for
    assert ("mover", ActorEvent.PRECOLLISION) in log
    first_post = min(i for i, entry in enumerate(log) if entry[1] == ActorEvent.POSTUPDATE)
    last_pre = max(i for i, entry in enumerate(log) if entry[1] == ActorEvent.PRECOLLISION)
    exit_at = log.index(("leaver", ActorEvent.EXIT_VIEWPORT))
    last_post = max(i for i, entry in enumerate(log) if entry[1] == ActorEvent.POSTUPDATE)

    assert last_pre < first_post
    assert last_post < exit_at


def test_precollision_reaches_both_sides_with_opposite_vectors(scene):
    a = box(50, 50, name="a")
    b = box(50, 65, name="b")
    seen = {}
    a.on(ActorEvent.PRECOLLISION, lambda e: seen.setdefault("a", e))
    b.on(ActorEvent.PRECOLLISION, lambda e: seen.setdefault("b", e))
    scene.add(a)
    scene.add(b)

    scene.update(0)

    assert seen["a"].other is b
    assert seen["b"].other is a
    assert seen["a"].intersection == Vector2(0, -5)
    assert seen["b"].intersection == Vector2(0, 5)


def test_fixed_pushes_active_out(scene):
    wall = box(50, 50, kind=CollisionType.FIXED)
    ball = box(50, 65)
    scene.add(wall)
    scene.add(ball)

    scene.update(0)

    assert wall.pos == Vector2(50, 50)
    assert ball.pos == Vector2(50, 70)


def test_active_pair_split_the_push(scene):
    a = box(50, 50)
    b = box(50, 65)
    scene.add(a)
    scene.add(b)

    scene.update(0)

    assert a.pos == Vector2(50, 47.5)
    assert b.pos == Vector2(50, 67.5)


def test_passive_reports_but_never_moves(scene):
    dust = box(50, 50, kind=CollisionType.PASSIVE)
    wall = box(50, 65, kind=CollisionType.FIXED)
    hits = []
    dust.on(ActorEvent.PRECOLLISION, hits.append)
    scene.add(dust)
    scene.add(wall)

    scene.update(0)

    assert len(hits) == 1
    assert dust.pos == Vector2(50, 50)
    assert wall.pos == Vector2(50, 65)


@pytest.mark.parametrize("kinds", [
    (CollisionType.PASSIVE, CollisionType.PASSIVE),
    (CollisionType.FIXED, CollisionType.FIXED),
    (CollisionType.PREVENT, CollisionType.ACTIVE),
])
def test_pairs_without_contact_events(scene, kinds):
    a = box(50, 50, kind=kinds[0])
    b = box(50, 55, kind=kinds[1])
    hits = []
    a.on(ActorEvent.PRECOLLISION, hits.append)
    b.on(ActorEvent.PRECOLLISION, hits.append)
    scene.add(a)
    scene.add(b)

    scene.update(0)

    assert hits == []


def test_killed_during_contact_is_not_resolved_and_is_dropped(scene):
    ball = box(50, 65)
    brick = box(50, 50)
    ball.on(ActorEvent.PRECOLLISION, lambda e: e.other.kill())
    scene.add(ball)
    scene.add(brick)

    scene.update(0)

    assert ball.pos == Vector2(50, 65)
    assert brick not in scene
    assert ball in scene


def test_killed_actor_gets_no_postupdate(scene):
    actor = box(50, 50)
    posts = []
    actor.on(ActorEvent.POSTUPDATE, posts.append)
    scene.add(actor)
    actor.kill()

    scene.update(16)

    assert posts == []
    assert len(scene) == 0


def test_exit_viewport_fires_once(scene):
    actor = box(50, 50, size=10, vel=(0, 1000))
    exits = []
    actor.on(ActorEvent.EXIT_VIEWPORT, exits.append)
    scene.add(actor)

    scene.update(100)
    scene.update(100)

    assert len(exits) == 1
    assert actor in scene  # leaving the screen does not remove an actor


def test_no_exit_for_actor_added_off_screen(scene):
    actor = box(50, 200, size=10, vel=(0, 100))
    exits = []
    actor.on(ActorEvent.EXIT_VIEWPORT, exits.append)
    scene.add(actor)

    scene.update(16)

    assert exits == []


def test_reentering_arms_exit_again(scene):
    actor = box(50, 50, size=10)
    exits = []
    actor.on(ActorEvent.EXIT_VIEWPORT, exits.append)
    scene.add(actor)

    actor.pos.y = 150
    scene.update(0)
    actor.pos.y = 50
    scene.update(0)
    actor.pos.y = -50
    scene.update(0)

    assert len(exits) == 2


def test_partly_visible_actor_is_on_screen(scene):
    assert scene.is_on_screen(box(50, 105, size=20))
    assert not scene.is_on_screen(box(50, 111, size=20))


def test_draw_paints_background_and_actors(scene):
    scene.add(box(20, 20, size=10, color=(255, 255, 255)))
    buffer = new_buffer(100, 100)

    scene.draw(buffer)

    assert tuple(buffer[20, 20]) == (255, 255, 255)
    assert tuple(buffer[80, 80]) == (10, 20, 30)


def test_clear_drops_every_actor(scene):
    scene.add(box(50, 50))
    scene.update(0)
    scene.clear()

    assert len(scene) == 0

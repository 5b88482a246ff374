"""Collision response rules.

Plain functions over actors and vectors so each rule can be checked in
isolation; the session wires them to actor lifecycle events.
"""

import math
import random

from pygame.math import Vector2

from spacebreak.engine.actor import Actor

# Defaults (overridable through GameplaySettings)
BALL_SPEED_UP = 0.1
PADDLE_SHRINK = 0.25
PADDLE_MIN_WIDTH = 50.0


def speed_up(vel: Vector2, factor: float = BALL_SPEED_UP) -> None:
    """Increase a velocity in place by ``factor`` of itself."""
    vel.x += vel.x * factor
    vel.y += vel.y * factor


def shrink_width(
    width: float,
    factor: float = PADDLE_SHRINK,
    min_width: float = PADDLE_MIN_WIDTH,
) -> float:
    """Shrink a paddle width by ``factor``, never going below ``min_width``.

    A paddle already at (or under) the floor keeps its width.
    """
    if width <= min_width:
        return width
    return max(min_width, width - width * factor)


def reflect(vel: Vector2, intersection: Vector2) -> None:
    """Reflect a velocity in place on the dominant axis of a contact.

    The component along which the (normalized) intersection is largest is
    negated. A zero-length intersection leaves the velocity untouched.
    """
    if intersection.length_squared() == 0:
        return

    normal = intersection.normalize()
    if abs(normal.x) > abs(normal.y):
        vel.x *= -1
    else:
        vel.y *= -1


def bounce_off_sides(actor: Actor, screen_width: float) -> bool:
    """Point horizontal velocity back into the field at a side border.

    Returns True when the actor touched a border.
    """
    if actor.left < 0:
        actor.vel.x = abs(actor.vel.x)
        return True
    if actor.right > screen_width:
        actor.vel.x = -abs(actor.vel.x)
        return True
    return False


def bounce_off_walls(actor: Actor, screen_width: float) -> bool:
    """Keep an actor inside the left, right and top borders.

    The bottom stays open: leaving through it is how the ball is lost.
    Returns True when any border was touched.
    """
    bounced = bounce_off_sides(actor, screen_width)
    if actor.top < 0:
        actor.vel.y = abs(actor.vel.y)
        bounced = True
    return bounced


def random_particle_velocity(rng: random.Random | None = None) -> Vector2:
    """Velocity for an explosion particle: drifting left, falling down."""
    rng = rng or random
    vel_x = rng.random() * 50 + 1
    vel_y = math.floor(rng.random() * (150 - 50 + 1) + 50)
    return Vector2(-vel_x, vel_y)


def has_won(score: int, target_score: int) -> bool:
    """The game is won once every brick and spaceship has been scored."""
    return score >= target_score

"""Entity builders: paddle, ball, brick grid, spaceship row and explosions."""

import random
import logging
from typing import List

from spacebreak.engine.actor import Actor, CircleActor, CollisionType
from spacebreak.game.rules import random_particle_velocity

logger = logging.getLogger(__name__)


# Colors
MAGENTA = (255, 0, 255)
GREEN = (0, 255, 0)
DARK_GRAY = (169, 169, 169)
BLACK = (0, 0, 0)

# Paddle
PADDLE_X = 150
PADDLE_WIDTH = 60
PADDLE_HEIGHT = 40

# Ball
BALL_X, BALL_Y = 100, 300
BALL_RADIUS = 10
BALL_VELOCITY = (200, 200)

# Bricks
BRICK_ROWS = 2
BRICK_COLUMNS = 5
BRICK_PADDING = 20
BRICK_X_OFFSET = 65
BRICK_Y_OFFSET = 40
BRICK_HEIGHT = 30

# Spaceships
SHIP_COLUMNS = 3
SHIP_PADDING = 80
SHIP_X_OFFSET = 110
SHIP_Y_OFFSET = 20
SHIP_HEIGHT = 10
SHIP_VELOCITY = (100, 0)

# Explosion particles
PARTICLE_SIZE = 10
PARTICLES_PER_EXPLOSION = 5


def build_paddle(screen_height: float) -> Actor:
    """Paddle centered on the bottom edge of the field."""
    return Actor(
        PADDLE_X, screen_height,
        PADDLE_WIDTH, PADDLE_HEIGHT,
        color=DARK_GRAY,
        collision_type=CollisionType.FIXED,
        name="paddle",
    )


def build_ball() -> CircleActor:
    return CircleActor(
        BALL_X, BALL_Y, BALL_RADIUS,
        color=MAGENTA,
        vel=BALL_VELOCITY,
        collision_type=CollisionType.ACTIVE,
        name="ball",
    )


def build_bricks(
    screen_width: float,
    rows: int = BRICK_ROWS,
    columns: int = BRICK_COLUMNS,
) -> List[Actor]:
    """Grid of bricks, row by row, left to right."""
    padding = BRICK_PADDING
    brick_width = screen_width / columns - padding - padding / columns

    bricks = []
    for j in range(rows):
        for i in range(columns):
            bricks.append(Actor(
                BRICK_X_OFFSET + i * (brick_width + padding) + padding,
                BRICK_Y_OFFSET + j * (BRICK_HEIGHT + padding) + padding,
                brick_width, BRICK_HEIGHT,
                color=GREEN,
                collision_type=CollisionType.ACTIVE,
                name=f"brick_{j}_{i}",
            ))
    return bricks


def build_spaceships(screen_width: float, columns: int = SHIP_COLUMNS) -> List[Actor]:
    """Row of ships cruising sideways above the bricks.

    Every ship gets its own velocity vector so reversing one never turns
    the others around.
    """
    ship_width = screen_width / columns / 2

    return [
        Actor(
            SHIP_X_OFFSET + i * (ship_width + SHIP_PADDING) + SHIP_PADDING,
            SHIP_Y_OFFSET,
            ship_width, SHIP_HEIGHT,
            color=MAGENTA,
            vel=SHIP_VELOCITY,
            collision_type=CollisionType.ACTIVE,
            name=f"spaceship_{i}",
        )
        for i in range(columns)
    ]


def build_explosion(
    x: float,
    y: float,
    count: int = PARTICLES_PER_EXPLOSION,
    rng: random.Random | None = None,
) -> List[Actor]:
    """Particles fanning out from an impact point.

    Particles are passive: they report contacts but never push anything.
    """
    particles = [
        Actor(
            x + i * count, y,
            PARTICLE_SIZE, PARTICLE_SIZE,
            color=BLACK,
            vel=random_particle_velocity(rng),
            collision_type=CollisionType.PASSIVE,
            name="particle",
        )
        for i in range(count)
    ]
    logger.debug(f"Explosion at ({x:.0f}, {y:.0f}) with {len(particles)} particles")
    return particles

"""Actors: positioned, colored, collidable objects living in a scene.

An actor is an axis-aligned box anchored at its center. Gameplay code
attaches behaviour through per-actor lifecycle events rather than by
subclassing:

    ball.on(ActorEvent.PRECOLLISION, handle_contact)
    ball.on(ActorEvent.POSTUPDATE, bounce_off_walls)
    ball.on(ActorEvent.EXIT_VIEWPORT, lose)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Tuple
import logging

from pygame.math import Vector2

from spacebreak.graphics.primitives import Buffer, Color, draw_circle, draw_rect

logger = logging.getLogger(__name__)


class CollisionType(Enum):
    """How an actor takes part in collisions."""

    PREVENT = auto()  # No collision events, no resolution
    PASSIVE = auto()  # Raises events, never pushed or pushes
    ACTIVE = auto()   # Raises events and is pushed out of overlaps
    FIXED = auto()    # Raises events, pushes others but never moves


class ActorEvent(Enum):
    """Lifecycle events an actor emits during a scene step."""

    PRECOLLISION = "precollision"
    POSTUPDATE = "postupdate"
    EXIT_VIEWPORT = "exitviewport"
    KILL = "kill"


@dataclass
class PreCollisionEvent:
    """Contact between two actors, reported to each of them.

    Attributes:
        actor: The actor receiving the event
        other: The actor it touches
        intersection: Minimum translation that separates ``actor`` from
            ``other`` (points away from ``other``)
    """

    actor: "Actor"
    other: "Actor"
    intersection: Vector2


@dataclass
class PostUpdateEvent:
    actor: "Actor"
    delta_ms: float


@dataclass
class ExitViewportEvent:
    actor: "Actor"


@dataclass
class KillEvent:
    actor: "Actor"


ActorHandler = Callable[[Any], None]


class Actor:
    """A rectangle with position, velocity and lifecycle events."""

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color = (255, 255, 255),
        vel: Tuple[float, float] | Vector2 | None = None,
        collision_type: CollisionType = CollisionType.PREVENT,
        name: str = "actor",
    ) -> None:
        self.pos = Vector2(x, y)
        self.vel = Vector2(vel) if vel is not None else Vector2(0, 0)
        self.width = float(width)
        self.height = float(height)
        self.color = color
        self.collision_type = collision_type
        self.name = name

        self._killed = False
        self._handlers: Dict[ActorEvent, List[ActorHandler]] = {e: [] for e in ActorEvent}

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.name} pos=({self.pos.x:.1f}, {self.pos.y:.1f}) "
            f"size=({self.width:.1f}x{self.height:.1f})>"
        )

    # Bounds
    @property
    def left(self) -> float:
        return self.pos.x - self.width / 2

    @property
    def right(self) -> float:
        return self.pos.x + self.width / 2

    @property
    def top(self) -> float:
        return self.pos.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.pos.y + self.height / 2

    def overlaps(self, other: "Actor") -> bool:
        """Check whether the two boxes overlap (touching edges do not count)."""
        return (
            self.left < other.right and self.right > other.left
            and self.top < other.bottom and self.bottom > other.top
        )

    def intersection(self, other: "Actor") -> Vector2 | None:
        """Minimum translation vector pushing this actor out of ``other``.

        Returns None when the boxes do not overlap.
        """
        if not self.overlaps(other):
            return None

        overlap_x = min(self.right, other.right) - max(self.left, other.left)
        overlap_y = min(self.bottom, other.bottom) - max(self.top, other.top)

        if overlap_x < overlap_y:
            direction = 1.0 if self.pos.x >= other.pos.x else -1.0
            return Vector2(overlap_x * direction, 0.0)

        direction = 1.0 if self.pos.y >= other.pos.y else -1.0
        return Vector2(0.0, overlap_y * direction)

    # Lifecycle
    @property
    def is_killed(self) -> bool:
        return self._killed

    def kill(self) -> None:
        """Mark the actor dead. The scene drops it at the end of the step."""
        if self._killed:
            return
        self._killed = True
        logger.debug(f"Killed {self!r}")
        self.emit(ActorEvent.KILL, KillEvent(self))

    def on(self, event: ActorEvent | str, handler: ActorHandler) -> Callable[[], None]:
        """
        Attach a handler to a lifecycle event.

        Args:
            event: Lifecycle event (enum member or its string value)
            handler: Callable receiving the event payload

        Returns:
            Function that detaches the handler
        """
        event = ActorEvent(event)
        self._handlers[event].append(handler)

        def off() -> None:
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return off

    def emit(self, event: ActorEvent, payload: Any) -> None:
        """Call every handler for ``event``. Handler errors propagate."""
        for handler in list(self._handlers[event]):
            handler(payload)

    def update(self, delta_ms: float) -> None:
        """Integrate velocity over one frame."""
        self.pos += self.vel * (delta_ms / 1000.0)

    def draw(self, buffer: Buffer) -> None:
        draw_rect(buffer, self.left, self.top, self.width, self.height, self.color)


class CircleActor(Actor):
    """An actor drawn as a filled circle inside its square bounds."""

    def __init__(self, x: float, y: float, radius: float, **kwargs: Any) -> None:
        super().__init__(x, y, radius * 2, radius * 2, **kwargs)
        self.radius = float(radius)

    def draw(self, buffer: Buffer) -> None:
        draw_circle(buffer, self.pos.x, self.pos.y, self.radius, self.color)

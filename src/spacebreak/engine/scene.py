"""Scene: the set of live actors and the per-frame simulation step."""

from typing import Iterator, List
import logging

from spacebreak.engine.actor import (
    Actor,
    ActorEvent,
    CollisionType,
    ExitViewportEvent,
    PostUpdateEvent,
    PreCollisionEvent,
)
from spacebreak.graphics.primitives import Buffer, Color, clear

logger = logging.getLogger(__name__)


class Scene:
    """Owns actors and advances them one frame at a time.

    Each call to :meth:`update` runs, in order:
        1. update      - integrate velocities
        2. collision   - precollision events, then overlap resolution
        3. postupdate  - per-actor postupdate events
        4. viewport    - exitviewport events for actors that just left
        5. cleanup     - killed actors are dropped
    """

    def __init__(self, width: int, height: int, background: Color = (0, 0, 0)) -> None:
        self.width = width
        self.height = height
        self.background = background
        self._actors: List[Actor] = []
        self._in_viewport: dict[int, bool] = {}

    def __len__(self) -> int:
        return len(self._actors)

    def __iter__(self) -> Iterator[Actor]:
        return iter(list(self._actors))

    def __contains__(self, actor: Actor) -> bool:
        return actor in self._actors

    def add(self, actor: Actor) -> None:
        """Add an actor. Adding the same actor twice is ignored."""
        if actor in self._actors:
            return
        self._actors.append(actor)
        self._in_viewport[id(actor)] = self.is_on_screen(actor)

    def remove(self, actor: Actor) -> None:
        """Remove an actor. Unknown actors are ignored."""
        if actor in self._actors:
            self._actors.remove(actor)
            self._in_viewport.pop(id(actor), None)

    def clear(self) -> None:
        """Remove every actor."""
        self._actors.clear()
        self._in_viewport.clear()

    def is_on_screen(self, actor: Actor) -> bool:
        """Check whether any part of the actor is inside the play field."""
        return (
            actor.right > 0 and actor.left < self.width
            and actor.bottom > 0 and actor.top < self.height
        )

    def update(self, delta_ms: float) -> None:
        """Advance the simulation by one frame."""
        for actor in self._live():
            actor.update(delta_ms)

        self._collide()

        for actor in self._live():
            actor.emit(ActorEvent.POSTUPDATE, PostUpdateEvent(actor, delta_ms))

        self._check_viewport()
        self._remove_killed()

    def draw(self, buffer: Buffer) -> None:
        """Render every live actor over the background."""
        clear(buffer, self.background)
        for actor in self._live():
            actor.draw(buffer)

    def _live(self) -> List[Actor]:
        return [a for a in self._actors if not a.is_killed]

    def _collide(self) -> None:
        candidates = [
            a for a in self._live()
            if a.collision_type != CollisionType.PREVENT
        ]

        for i, a in enumerate(candidates):
            for b in candidates[i + 1:]:
                if a.is_killed or b.is_killed:
                    continue
                if not self._can_collide(a, b):
                    continue

                mtv = a.intersection(b)
                if mtv is None:
                    continue

                a.emit(ActorEvent.PRECOLLISION, PreCollisionEvent(a, b, mtv))
                b.emit(ActorEvent.PRECOLLISION, PreCollisionEvent(b, a, -mtv))
                self._resolve(a, b, mtv)

    @staticmethod
    def _can_collide(a: Actor, b: Actor) -> bool:
        pair = {a.collision_type, b.collision_type}
        return pair != {CollisionType.PASSIVE} and pair != {CollisionType.FIXED}

    @staticmethod
    def _resolve(a: Actor, b: Actor, mtv) -> None:
        """Push overlapping solid actors apart along the translation vector."""
        if a.is_killed or b.is_killed:
            return
        if CollisionType.PASSIVE in (a.collision_type, b.collision_type):
            return

        if a.collision_type == CollisionType.FIXED:
            b.pos -= mtv
        elif b.collision_type == CollisionType.FIXED:
            a.pos += mtv
        else:
            a.pos += mtv / 2
            b.pos -= mtv / 2

    def _check_viewport(self) -> None:
        for actor in self._live():
            on_screen = self.is_on_screen(actor)
            was_on_screen = self._in_viewport.get(id(actor), on_screen)
            self._in_viewport[id(actor)] = on_screen

            if was_on_screen and not on_screen:
                logger.debug(f"{actor!r} left the viewport")
                actor.emit(ActorEvent.EXIT_VIEWPORT, ExitViewportEvent(actor))

    def _remove_killed(self) -> None:
        for actor in [a for a in self._actors if a.is_killed]:
            self.remove(actor)

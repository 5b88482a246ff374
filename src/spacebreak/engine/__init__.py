"""Actor and scene layer the gameplay rules are written against."""

from spacebreak.engine.actor import (
    Actor,
    ActorEvent,
    CircleActor,
    CollisionType,
    ExitViewportEvent,
    KillEvent,
    PostUpdateEvent,
    PreCollisionEvent,
)
from spacebreak.engine.scene import Scene

__all__ = [
    "Actor",
    "ActorEvent",
    "CircleActor",
    "CollisionType",
    "ExitViewportEvent",
    "KillEvent",
    "PostUpdateEvent",
    "PreCollisionEvent",
    "Scene",
]

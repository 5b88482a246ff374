"""Game session: one round of SPACEBREAK from first serve to the final dialog.

The session owns the scene and the actor collections, keeps the score and
wires the collision response rules to actor lifecycle events. Game flow
(playing, won, lost, finished) lives in the shared state machine; input
arrives over the event bus.
"""

import random
import logging
from typing import Callable, List, Optional

from spacebreak.config.settings import Settings, get_settings
from spacebreak.core.events import Event, EventBus, EventType
from spacebreak.core.state import GameState, StateContext, StateMachine
from spacebreak.engine.actor import (
    Actor,
    ActorEvent,
    ExitViewportEvent,
    KillEvent,
    PostUpdateEvent,
    PreCollisionEvent,
)
from spacebreak.engine.scene import Scene
from spacebreak.game import entities, rules
from spacebreak.graphics.primitives import Buffer
from spacebreak.ui.dialogs import Dialog, alert_dialog, confirm_dialog

logger = logging.getLogger(__name__)


class GameSession:
    """Runs the breakout / space invaders round and its restart loop."""

    def __init__(
        self,
        event_bus: EventBus,
        state_machine: StateMachine,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus
        self.state_machine = state_machine
        self._rng = rng or random.Random()

        display = self.settings.display
        self.scene = Scene(display.width, display.height, display.background)

        # Actors
        self.paddle: Optional[Actor] = None
        self.ball: Optional[Actor] = None
        self.bricks: List[Actor] = []
        self.spaceships: List[Actor] = []
        self.particles: List[Actor] = []

        # Stats
        self.score = 0
        self.target_score = 0
        self.won = False

        self.dialog: Optional[Dialog] = None

        self._unsubscribers: List[Callable[[], None]] = [
            event_bus.subscribe(EventType.POINTER_MOVE, self._on_pointer_move),
            event_bus.subscribe(EventType.CONFIRM, self._on_confirm),
            event_bus.subscribe(EventType.CANCEL, self._on_cancel),
        ]
        state_machine.add_listener(self._on_state_changed)

    @property
    def state(self) -> GameState:
        return self.state_machine.state

    # Setup and teardown
    def initialize(self) -> None:
        """Build every actor, wire handlers and start a fresh round."""
        display = self.settings.display
        gameplay = self.settings.gameplay

        self.paddle = entities.build_paddle(display.height)
        self.paddle.on(ActorEvent.PRECOLLISION, self._on_paddle_precollision)
        self.scene.add(self.paddle)

        self.ball = entities.build_ball()
        self.ball.on(ActorEvent.PRECOLLISION, self._on_ball_precollision)
        self.ball.on(ActorEvent.POSTUPDATE, self._on_ball_postupdate)
        self.ball.on(ActorEvent.EXIT_VIEWPORT, self._on_ball_exit_viewport)
        self.scene.add(self.ball)

        self.bricks = entities.build_bricks(
            display.width, gameplay.brick_rows, gameplay.brick_columns
        )
        for brick in self.bricks:
            brick.on(ActorEvent.KILL, self._forget)
            self.scene.add(brick)

        self.spaceships = entities.build_spaceships(display.width, gameplay.spaceship_columns)
        for ship in self.spaceships:
            ship.on(ActorEvent.PRECOLLISION, self._on_spaceship_precollision)
            ship.on(ActorEvent.POSTUPDATE, self._on_spaceship_postupdate)
            ship.on(ActorEvent.KILL, self._forget)
            self.scene.add(ship)

        self.particles = []
        self.score = 0
        self.target_score = len(self.bricks) + len(self.spaceships)
        self.won = False

        logger.info(
            f"Session initialized: {len(self.bricks)} bricks, "
            f"{len(self.spaceships)} spaceships"
        )

    def reset(self) -> None:
        """Remove every actor from the scene and empty all collections."""
        self.scene.clear()
        self.bricks = []
        self.spaceships = []
        self.particles = []
        self.paddle = None
        self.ball = None
        self.score = 0
        logger.info("Session reset")

    def restart(self) -> None:
        """Tear everything down and play again from scratch."""
        self.reset()
        self.initialize()
        self.state_machine.transition(GameState.PLAYING, score=0, target_score=self.target_score)
        self.event_bus.emit(Event(EventType.GAME_RESTART, source="session"))

    def close(self) -> None:
        """Detach from the event bus and the state machine."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.state_machine.remove_listener(self._on_state_changed)

    # Frame loop
    def update(self, delta_ms: float) -> None:
        """Step the scene. A pending dialog blocks the game."""
        if not self.state_machine.is_playing:
            return
        self.scene.update(delta_ms)

    def render(self, buffer: Buffer) -> None:
        self.scene.draw(buffer)

    # Ball
    def _on_ball_precollision(self, event: PreCollisionEvent) -> None:
        other = event.other

        if other in self.bricks:
            self._ball_collides(other)
            self._add_point()
        elif other in self.spaceships:
            self._ball_collides(other)
            self._explode(self.ball.pos.x, self.ball.pos.y)
            self._add_point()

        # Particles are ignored, everything else deflects the ball
        if other not in self.particles:
            rules.reflect(self.ball.vel, event.intersection)

    def _on_ball_postupdate(self, event: PostUpdateEvent) -> None:
        rules.bounce_off_walls(event.actor, self.scene.width)

        if rules.has_won(self.score, self.target_score) and not self.won:
            self._win()

    def _on_ball_exit_viewport(self, event: ExitViewportEvent) -> None:
        self._lose("ball left the field")

    def _ball_collides(self, target: Actor) -> None:
        """Speed the ball up, shrink the paddle and destroy ``target``."""
        gameplay = self.settings.gameplay

        rules.speed_up(self.ball.vel, gameplay.ball_speed_up)
        if self.paddle is not None:
            self.paddle.width = rules.shrink_width(
                self.paddle.width,
                gameplay.paddle_shrink,
                gameplay.paddle_min_width,
            )
        target.kill()

    def _add_point(self) -> None:
        self.score += 1
        self.event_bus.emit(Event(
            EventType.SCORE_CHANGED,
            data={"score": self.score, "target": self.target_score},
            source="session",
        ))

    # Paddle
    def _on_paddle_precollision(self, event: PreCollisionEvent) -> None:
        if event.other in self.particles and event.other.pos.y > 0:
            self.paddle.kill()
            self._lose("paddle hit by debris")

    def _on_pointer_move(self, event: Event) -> None:
        if self.paddle is not None and self.state_machine.is_playing:
            self.paddle.pos.x = event.data.get("x", self.paddle.pos.x)

    # Spaceships
    def _on_spaceship_precollision(self, event: PreCollisionEvent) -> None:
        if event.other in self.spaceships:
            event.actor.vel.x *= -1

    def _on_spaceship_postupdate(self, event: PostUpdateEvent) -> None:
        rules.bounce_off_sides(event.actor, self.scene.width)

    def _explode(self, x: float, y: float) -> None:
        count = self.settings.gameplay.particles_per_explosion
        for particle in entities.build_explosion(x, y, count, self._rng):
            particle.on(ActorEvent.EXIT_VIEWPORT, self._on_particle_exit_viewport)
            particle.on(ActorEvent.KILL, self._forget)
            self.particles.append(particle)
            self.scene.add(particle)

    def _on_particle_exit_viewport(self, event: ExitViewportEvent) -> None:
        event.actor.kill()

    def _forget(self, event: KillEvent) -> None:
        """Drop a destroyed actor from whichever collection holds it."""
        for collection in (self.bricks, self.spaceships, self.particles):
            if event.actor in collection:
                collection.remove(event.actor)
                return

    # Win / lose flow
    def _win(self) -> None:
        self.won = True
        if self.state_machine.transition(
            GameState.WON,
            score=self.score,
            target_score=self.target_score,
            reason="field cleared",
        ):
            logger.info(f"Game won with {self.score} points")
            self.event_bus.emit(Event(
                EventType.GAME_WON, data={"score": self.score}, source="session"
            ))

    def _lose(self, reason: str) -> None:
        if self.state_machine.transition(
            GameState.LOST,
            score=self.score,
            target_score=self.target_score,
            reason=reason,
        ):
            logger.info(f"Game lost: {reason} (score {self.score})")
            self.event_bus.emit(Event(
                EventType.GAME_LOST,
                data={"score": self.score, "reason": reason},
                source="session",
            ))

    def _on_state_changed(
        self, old_state: GameState, new_state: GameState, context: StateContext
    ) -> None:
        self.event_bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"old": old_state.name, "new": new_state.name},
            source="session",
        ))

        language = self.settings.language

        if new_state == GameState.WON:
            self.dialog = confirm_dialog("win", language, score=context.score)
        elif new_state == GameState.LOST:
            self.dialog = confirm_dialog("lose", language)
        elif new_state == GameState.FINISHED:
            self.dialog = alert_dialog("thanks", language)
        else:
            self.dialog = None

    def _on_confirm(self, event: Event) -> None:
        if self.state_machine.awaiting_answer:
            self.restart()
        elif self.state == GameState.FINISHED:
            self._finish()

    def _on_cancel(self, event: Event) -> None:
        if self.state_machine.awaiting_answer:
            self.state_machine.transition(GameState.FINISHED)
        elif self.state == GameState.FINISHED:
            self._finish()

    def _finish(self) -> None:
        self.dialog = None
        logger.info("Player quit")
        self.event_bus.emit(Event(
            EventType.GAME_FINISHED, data={"score": self.score}, source="session"
        ))

"""
Application wiring.

Creates the shared state machine and event bus, the game session and the
window, and routes frame ticks between them.
"""

import logging

from spacebreak.config.settings import Settings, get_settings
from spacebreak.core.events import Event, EventBus, EventType
from spacebreak.core.state import StateMachine
from spacebreak.game.session import GameSession
from spacebreak.ui.window import GameWindow, WindowConfig

logger = logging.getLogger(__name__)

# Longest simulated step; a stalled frame must not let the ball tunnel
MAX_FRAME_MS = 50.0


class SpacebreakApp:
    """Main application integrating all systems."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

        # Core systems
        self.state_machine = StateMachine()
        self.event_bus = EventBus()

        self.session = GameSession(
            event_bus=self.event_bus,
            state_machine=self.state_machine,
            settings=self.settings,
        )

        self.window = GameWindow(
            config=WindowConfig.from_settings(self.settings),
            state_machine=self.state_machine,
            event_bus=self.event_bus,
        )

        self._setup_event_handlers()

        logger.info("SpacebreakApp initialized")

    def _setup_event_handlers(self) -> None:
        self.event_bus.subscribe(EventType.TICK, self._on_tick)
        self.event_bus.subscribe(EventType.GAME_FINISHED, self._on_shutdown)
        self.event_bus.subscribe(EventType.SHUTDOWN, self._on_shutdown)

    def _on_tick(self, event: Event) -> None:
        """Handle frame tick - update and render."""
        delta = event.data.get("delta", 1.0 / self.settings.display.fps)
        delta_ms = min(delta * 1000, MAX_FRAME_MS)

        self.session.update(delta_ms)
        self._render_to_window()

    def _render_to_window(self) -> None:
        """Render the session into the window's frame buffer and overlays."""
        self.session.render(self.window.display.buffer)

        self.window.dialog = self.session.dialog
        self.window.hud_text = f"{self.session.score} / {self.session.target_score}"
        self.window.debug_lines = [
            f"Actors: {len(self.session.scene)}",
            f"Particles: {len(self.session.particles)}",
        ]

    def _on_shutdown(self, event: Event) -> None:
        logger.info(f"Shutdown requested by {event.source}")
        self.window.stop()

    async def run(self) -> None:
        """Start the first round and run the window loop until quit."""
        logger.info("Starting SPACEBREAK...")
        self.session.initialize()
        try:
            await self.window.run()
        finally:
            self.session.close()

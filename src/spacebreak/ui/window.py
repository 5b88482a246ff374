"""
Main game window using pygame.

Turns pygame input into bus events, drives the frame loop and draws the
play field, the HUD and any open dialog.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config.settings import Settings
from ..core.state import StateMachine
from ..core.events import EventBus, EventType, Event, pointer_move_event, tick_event
from .display import FrameDisplay
from .dialogs import Dialog

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    width: int = 800   # play field, game units
    height: int = 600
    scale: float = 1.0
    title: str = "SPACEBREAK"
    fullscreen: bool = False
    fps: int = 60
    show_debug: bool = False

    # Colors
    text_color: tuple[int, int, int] = (240, 240, 250)
    panel_color: tuple[int, int, int] = (30, 30, 45)
    accent_color: tuple[int, int, int] = (100, 150, 255)
    overlay_color: tuple[int, int, int, int] = (0, 0, 0, 150)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        display = settings.display
        return cls(
            width=display.width,
            height=display.height,
            scale=display.scale,
            title=display.title,
            fullscreen=display.fullscreen,
            fps=display.fps,
            show_debug=settings.debug,
        )

    @property
    def window_size(self) -> Tuple[int, int]:
        return int(self.width * self.scale), int(self.height * self.scale)


class GameWindow:
    """
    Desktop window hosting the game.

    Controls:
        MOUSE: Move the paddle
        ENTER / Y / click OK: Confirm dialog
        ESC / N / click Cancel: Cancel dialog
        D: Toggle debug panel
        S: Capture screenshot
        Q / ESC: Quit (while no dialog is open)
    """

    def __init__(
        self,
        config: WindowConfig | None = None,
        state_machine: StateMachine | None = None,
        event_bus: EventBus | None = None
    ) -> None:
        self.config = config or WindowConfig()
        self.state_machine = state_machine or StateMachine()
        self.event_bus = event_bus or EventBus()

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = self.config.show_debug

        self.display = FrameDisplay(self.config.width, self.config.height)

        # Filled in by the application every frame
        self.dialog: Optional[Dialog] = None
        self.hud_text: str = ""
        self.debug_lines: list[str] = []

        # Fonts
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        # Dialog button hit boxes (window coordinates)
        self._buttons: dict[EventType, pygame.Rect] = {}

        logger.info("GameWindow created")

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def to_world(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        """Map window pixel coordinates into play field coordinates."""
        return pos[0] / self.config.scale, pos[1] / self.config.scale

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(self.config.window_size, flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.Font(None, 32)
        self._small_font = pygame.font.Font(None, 22)

        logger.info(f"Pygame initialized: {self.config.window_size[0]}x{self.config.window_size[1]}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()

            elif event.type == pygame.MOUSEMOTION:
                x, y = self.to_world(event.pos)
                self.event_bus.emit(pointer_move_event(x, y))

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_click(self, pos: Tuple[int, int]) -> None:
        if self.dialog is None:
            return
        for event_type, rect in self._buttons.items():
            if rect.collidepoint(pos):
                self.event_bus.queue_event(Event(event_type, source="mouse"))
                return

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if self.dialog is not None:
            if key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE, pygame.K_y):
                self.event_bus.queue_event(Event(EventType.CONFIRM, source="keyboard"))
            elif key in (pygame.K_ESCAPE, pygame.K_n):
                self.event_bus.queue_event(Event(EventType.CANCEL, source="keyboard"))
            return

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.event_bus.queue_event(Event(EventType.SHUTDOWN, source="keyboard"))
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_s:
            self._capture_screenshot()

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.blit(self.display.render(self.config.scale), (0, 0))
        self._render_hud()
        if self._show_debug:
            self._render_debug_panel()
        if self.dialog is not None:
            self._render_dialog(self.dialog)
        else:
            self._buttons = {}

        pygame.display.flip()

    def _render_hud(self) -> None:
        if not self._small_font or not self.hud_text:
            return
        text_surface = self._small_font.render(self.hud_text, True, self.config.text_color)
        width = self.config.window_size[0]
        self._screen.blit(text_surface, (width - text_surface.get_width() - 10, 8))

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        if not self._small_font:
            return

        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"State: {self.state_machine.state.name}",
            *self.debug_lines,
        ]

        rect = pygame.Rect(8, 8, 200, 18 * len(lines) + 12)
        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        panel.fill((*self.config.panel_color, 200))
        self._screen.blit(panel, rect.topleft)

        y = rect.y + 6
        for line in lines:
            text_surface = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (rect.x + 8, y))
            y += 18

    def _render_dialog(self, dialog: Dialog) -> None:
        """Dim the field and draw a centered prompt with its buttons."""
        if not self._font or not self._small_font:
            return

        width, height = self.config.window_size

        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill(self.config.overlay_color)
        self._screen.blit(overlay, (0, 0))

        message = self._font.render(dialog.message, True, self.config.text_color)
        box = pygame.Rect(0, 0, max(360, message.get_width() + 60), 150)
        box.center = (width // 2, height // 2)

        pygame.draw.rect(self._screen, self.config.panel_color, box, border_radius=8)
        pygame.draw.rect(self._screen, self.config.accent_color, box, 2, border_radius=8)
        self._screen.blit(message, message.get_rect(center=(box.centerx, box.y + 45)))

        labels = [(EventType.CONFIRM, dialog.confirm_label)]
        if dialog.has_cancel:
            labels.append((EventType.CANCEL, dialog.cancel_label))

        button_w, button_h, gap = 120, 36, 20
        total = len(labels) * button_w + (len(labels) - 1) * gap
        x = box.centerx - total // 2

        self._buttons = {}
        for event_type, label in labels:
            rect = pygame.Rect(x, box.bottom - button_h - 20, button_w, button_h)
            pygame.draw.rect(self._screen, self.config.accent_color, rect, border_radius=6)
            text_surface = self._small_font.render(label, True, (255, 255, 255))
            self._screen.blit(text_surface, text_surface.get_rect(center=rect.center))
            self._buttons[event_type] = rect
            x += button_w + gap

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game loop started")

        while self._running:
            self._handle_events()

            # Emit tick event
            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            # Dialog answers and quit requests apply after this frame's tick
            await self.event_bus.process_queue()

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game loop stopped")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False

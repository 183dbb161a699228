"""
Game window using pygame.

Drives one simulation tick per display refresh, turns keyboard and
mouse input into queued events, and draws the frame plus the text
overlays (start screen, score HUD, game-over screen).
"""

import asyncio
import logging

import pygame

from ..config.settings import DisplaySettings
from ..core.events import (
    EventBus, EventType, Event,
    flap_event, start_event, restart_event, resize_event, tick_event,
)
from ..game.session import SessionController
from ..game.snapshot import FrameSnapshot, Overlay
from ..graphics.renderer import FrameRenderer

logger = logging.getLogger(__name__)

TEXT_COLOR = (255, 255, 255)
SHADOW_COLOR = (30, 30, 40)
ACCENT_COLOR = (255, 210, 90)
DIM_COLOR = (230, 230, 240)


class GameWindow:
    """
    Desktop window hosting the game.

    Keyboard Mapping:
        SPACE / UP / W: Flap (also starts the run)
        RETURN: Start from the title screen, restart after game over
        R: Restart after game over
        Mouse button: Flap, or restart on the game-over screen
        D: Toggle debug overlay
        S: Capture screenshot
        ESC / Q: Exit
    """

    FLAP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)
    POINTER_BUTTONS = (1, 2, 3)

    def __init__(
        self,
        controller: SessionController,
        event_bus: EventBus,
        display: DisplaySettings | None = None,
        renderer: FrameRenderer | None = None,
        show_debug: bool = False,
    ) -> None:
        self.controller = controller
        self.event_bus = event_bus
        self.display = display or DisplaySettings()
        self.renderer = renderer or FrameRenderer()
        self.controller.parallax.tile_width = self.renderer.tile_width

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = show_debug

        # Fonts
        self._big_font: pygame.font.Font | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.display.title)

        flags = pygame.DOUBLEBUF
        if self.display.resizable:
            flags |= pygame.RESIZABLE

        self._screen = pygame.display.set_mode(
            (self.display.width, self.display.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._big_font = pygame.font.SysFont(None, 72)
        self._font = pygame.font.SysFont(None, 36)
        self._small_font = pygame.font.SysFont(None, 22)

        # The simulation must see the real surface size from the first tick
        width, height = self._screen.get_size()
        self.event_bus.queue_event(resize_event(width, height))

        logger.info(f"Pygame initialized: {width}x{height}")

    def _handle_events(self) -> None:
        """Translate pygame events into queued game events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self.event_bus.queue_event(resize_event(event.w, event.h))

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                # 4 and 5 are the scroll wheel
                if event.button in self.POINTER_BUTTONS:
                    self._handle_pointer()

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key
        overlay = self.controller.snapshot().overlay

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_s:
            self._capture_screenshot()

        elif key in self.FLAP_KEYS:
            self.event_bus.queue_event(flap_event(source="keyboard"))
        elif key == pygame.K_RETURN:
            if overlay == Overlay.START:
                self.event_bus.queue_event(start_event(source="keyboard"))
            elif overlay == Overlay.GAME_OVER:
                self.event_bus.queue_event(restart_event(source="keyboard"))
        elif key == pygame.K_r:
            self.event_bus.queue_event(restart_event(source="keyboard"))

    def _handle_pointer(self) -> None:
        """Clicks flap, except on the game-over screen where they restart."""
        if self.controller.snapshot().overlay == Overlay.GAME_OVER:
            self.event_bus.queue_event(restart_event(source="pointer"))
        else:
            self.event_bus.queue_event(flap_event(source="pointer"))

    def _render(self) -> None:
        """Render the playfield and overlays."""
        if not self._screen:
            return

        snapshot = self.controller.snapshot()
        buffer = self.renderer.render(snapshot)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))

        if snapshot.overlay == Overlay.START:
            self._render_start_screen(snapshot)
        elif snapshot.overlay == Overlay.HUD:
            self._render_hud(snapshot)
        else:
            self._render_game_over(snapshot)

        if self._show_debug:
            self._render_debug(snapshot)

        pygame.display.flip()

    def _blit_text(
        self,
        text: str,
        font: pygame.font.Font | None,
        center: tuple[int, int],
        color: tuple[int, int, int] = TEXT_COLOR,
    ) -> None:
        if not font or not self._screen:
            return
        shadow = font.render(text, True, SHADOW_COLOR)
        self._screen.blit(shadow, shadow.get_rect(center=(center[0] + 2, center[1] + 2)))
        surface = font.render(text, True, color)
        self._screen.blit(surface, surface.get_rect(center=center))

    def _render_start_screen(self, snapshot: FrameSnapshot) -> None:
        cx, h = snapshot.viewport_width // 2, snapshot.viewport_height
        self._blit_text("FLAPPY", self._big_font, (cx, h // 3), ACCENT_COLOR)
        self._blit_text("Space or click to start", self._font, (cx, h // 2 + 60))
        self._blit_text(f"Best: {snapshot.best_score}", self._small_font, (cx, h // 2 + 100), DIM_COLOR)

    def _render_hud(self, snapshot: FrameSnapshot) -> None:
        self._blit_text(str(snapshot.score), self._big_font, (snapshot.viewport_width // 2, 60))

    def _render_game_over(self, snapshot: FrameSnapshot) -> None:
        cx, h = snapshot.viewport_width // 2, snapshot.viewport_height
        self._blit_text("GAME OVER", self._big_font, (cx, h // 3), ACCENT_COLOR)
        self._blit_text(f"Score: {snapshot.score}", self._font, (cx, h // 2))
        self._blit_text(f"Best: {snapshot.best_score}", self._font, (cx, h // 2 + 40))
        self._blit_text("Click or Enter to restart", self._small_font, (cx, h // 2 + 90), DIM_COLOR)

    def _render_debug(self, snapshot: FrameSnapshot) -> None:
        """Render the debug information panel."""
        if not self._small_font or not self._screen:
            return

        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"State: {snapshot.state.name}",
            f"Tick: {snapshot.tick_count}",
            f"Pipes: {len(snapshot.obstacles)}",
            f"Actor y: {snapshot.actor.y:.1f}",
            f"Viewport: {snapshot.viewport_width}x{snapshot.viewport_height}",
        ]

        y = 8
        for line in lines:
            text_surface = self._small_font.render(line, True, TEXT_COLOR)
            self._screen.blit(text_surface, (8, y))
            y += 18

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main loop: input, drain, tick, render."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            # Input is applied between ticks, never during one
            await self.event_bus.process_queue()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            self._render()

            if self._clock:
                self._clock.tick(self.display.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the main loop after the current frame."""
        self._running = False

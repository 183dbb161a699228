"""
Main entry point for the game.

Builds the shared components from settings and runs the window loop.
"""

import asyncio
import logging
import sys
from pathlib import Path

from flappy.config.settings import Settings, get_settings
from flappy.core.events import EventBus, EventType, Event
from flappy.game.session import SessionController
from flappy.storage.best_score import BestScoreStore


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


def build_session(settings: Settings, event_bus: EventBus) -> SessionController:
    """Create the session controller with persistence wired in."""
    store = BestScoreStore(settings.best_score_path)
    return SessionController(settings=settings, event_bus=event_bus, store=store)


async def run_game(settings: Settings) -> None:
    """Run the windowed game until the player quits."""
    from flappy.simulator.window import GameWindow

    logger = logging.getLogger(__name__)

    event_bus = EventBus()
    controller = build_session(settings, event_bus)

    def on_new_best(event: Event) -> None:
        logger.info(f"Best score is now {event.data.get('best_score')}")

    event_bus.subscribe(EventType.NEW_BEST_SCORE, on_new_best)

    window = GameWindow(
        controller=controller,
        event_bus=event_bus,
        display=settings.display,
        show_debug=settings.debug,
    )
    await window.run()
    controller.detach()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("Flappy starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Flappy stopped")


if __name__ == "__main__":
    main()

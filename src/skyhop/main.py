"""
Main entry point for SKYHOP.

Loads settings, wires the high score store into the game mode and
opens the desktop window.
"""

import asyncio
import logging
import sys


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_window() -> None:
    """Run the desktop window."""
    from skyhop.config.settings import get_settings
    from skyhop.core.events import EventBus
    from skyhop.modes.base import ModeContext
    from skyhop.modes.skyhop import SkyhopMode
    from skyhop.simulator.window import SimulatorWindow, WindowConfig
    from skyhop.storage.high_score import JsonHighScoreStore

    settings = get_settings()
    event_bus = EventBus()

    context = ModeContext(
        event_bus=event_bus,
        settings=settings.game,
        high_score_store=JsonHighScoreStore(settings.high_score_path),
    )
    mode = SkyhopMode(context)

    window = SimulatorWindow(
        mode=mode,
        config=WindowConfig.from_settings(settings),
        event_bus=event_bus,
    )
    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv
    from skyhop.config.settings import get_settings

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("SKYHOP starting...")

    try:
        asyncio.run(run_window())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("SKYHOP stopped")


if __name__ == "__main__":
    main()

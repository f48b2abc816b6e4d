# humosync/main.py
import asyncio
import argparse
import logging
import sys
from pathlib import Path

from .config import DEVICE_URL, LOG_FILE, LOG_FORMAT, LOG_LEVEL, POLL_INTERVAL, UI_REFRESH_RATE
from .system import DashboardSystem, SystemLifecycle, SystemState

logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Live classification dashboard for the HumoSync camera'
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--hdmi',
        action='store_true',
        help='Use HDMI output (framebuffer) instead of curses'
    )
    mode.add_argument(
        '--headless',
        action='store_true',
        help='Write readings to the log only'
    )
    parser.add_argument(
        '--device-url',
        default=DEVICE_URL,
        help=f'Base URL of the camera device (default: {DEVICE_URL})'
    )
    parser.add_argument(
        '--interval',
        type=positive_float,
        default=POLL_INTERVAL,
        help=f'Status poll interval in seconds (default: {POLL_INTERVAL})'
    )
    parser.add_argument(
        '--log-level',
        default=LOG_LEVEL,
        choices=LOG_LEVELS,
        type=str.upper,
        help='Logging level'
    )
    args = parser.parse_args(argv)

    # argparse skips the choices check for defaults taken from the environment
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return args


def ui_mode(args: argparse.Namespace) -> str:
    if args.hdmi:
        return 'hdmi'
    if args.headless:
        return 'headless'
    return 'curses'


def configure_logging(level: str, mode: str) -> None:
    handlers = [logging.FileHandler(Path(LOG_FILE))]
    # curses owns the terminal
    if mode != 'curses':
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        handlers=handlers
    )


async def main(argv=None) -> int:
    """Main application entry point"""
    args = parse_args(argv)
    state = SystemState(ui_mode=ui_mode(args))
    configure_logging(args.log_level, state.ui_mode)

    try:
        components, exit_stack = await SystemLifecycle.initialize_components(
            state, args.device_url, args.interval
        )
    except Exception as e:
        logger.critical(f"Failed to start dashboard: {e}")
        return 1

    try:
        SystemLifecycle.setup_signal_handlers(state)

        system = DashboardSystem(components, state)
        system.start()

        while not state.shutdown_requested:
            try:
                await system.process_cycle()
            except Exception as e:
                logger.error(f"Display cycle error: {e}")
                state.error_state = True
            await asyncio.sleep(UI_REFRESH_RATE)

    except Exception as e:
        logger.critical(f"Fatal error in main loop: {e}")
        return 1
    finally:
        await SystemLifecycle.cleanup_components(components, exit_stack)

    return 0


def run():
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Program terminated by user")
        sys.exit(0)


if __name__ == "__main__":
    run()

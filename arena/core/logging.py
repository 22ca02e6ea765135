"""
Logging configuration module for the arena.

Routes the engine's log records through a rich handler on stderr, so they
never mix with the match narration printed on stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Log level used for each console verbose level.
VERBOSE_LOG_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def level_for_verbosity(verbose_level: int) -> int:
    """
    Returns the log level matching a console verbose level.

    Args:
        verbose_level (int): 0, 1 or 2. Higher values are clamped to 2.

    Returns:
        int: A logging level.

    """
    return VERBOSE_LOG_LEVELS[max(0, min(verbose_level, 2))]


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Sets up logging with rich colored output on stderr.

    Args:
        level (int): The logging level of the root logger.

    """
    console = Console(width=120, stderr=True, force_jupyter=False)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )

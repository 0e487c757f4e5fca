"""
Logging configuration for Deck Art Mirror.

Uses loguru for structured logging with rotation and retention. Every
record carries the Moxfield user and cache directory of the sync it
belongs to (``-`` outside a run), so one log file can hold many runs.
"""

import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from loguru import logger

from deckart.config import settings as settings_module

NO_RUN = "-"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[user]}</magenta> | <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "user={extra[user]} cache={extra[cache_dir]} | "
    "{name}:{function}:{line} - {message}"
)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure console and (optionally) file sinks from settings.

    Args:
        level: Console level override (e.g. from ``--log-level``)
    """
    settings = settings_module.settings
    console_level = (level or settings.log_level).upper()

    logger.remove()
    logger.configure(extra={"user": NO_RUN, "cache_dir": NO_RUN})

    logger.add(sys.stderr, level=console_level, format=CONSOLE_FORMAT, colorize=True)

    if settings.log_to_file:
        log_dir = settings.logs_dir
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "deckart_{time:YYYY-MM-DD}.log",
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="gz",
        )

    logger.debug("Logging initialized (level={})", console_level)


@contextmanager
def run_context(username: str, cache_dir: Union[str, Path]) -> Iterator[None]:
    """Tag every record logged inside the block with the sync's user and cache."""
    with logger.contextualize(user=username, cache_dir=str(cache_dir)):
        yield


def get_logger(name: str):
    """Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance

    Example:
        >>> from deckart.core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Writing card: {}", card_name)
    """
    return logger.bind(module=name)


class log_operation:
    """Context manager for logging a pipeline stage with timing.

    Example:
        >>> with log_operation("Reconciling cache", directory="cards"):
        ...     reconcile_cache(desired, Path("cards"))
        # Logs: "Reconciling cache [directory=cards] completed in 0.01s"
    """

    def __init__(self, operation: str, **context):
        self.operation = operation
        self.context = context
        self.start_time = None

    def _context_str(self) -> str:
        return " ".join(f"{k}={v}" for k, v in self.context.items())

    def __enter__(self):
        self.start_time = time.monotonic()
        logger.info("{} [{}] starting...", self.operation, self._context_str())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.monotonic() - self.start_time

        if exc_type is None:
            logger.info(
                "{} [{}] completed in {:.2f}s",
                self.operation,
                self._context_str(),
                duration,
            )
        else:
            logger.error(
                "{} [{}] failed after {:.2f}s: {}",
                self.operation,
                self._context_str(),
                duration,
                exc_val,
            )

        return False  # Don't suppress exceptions

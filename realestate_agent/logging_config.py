"""Process-wide logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from realestate_agent.config import settings

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

_initialized = False


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the root logger with a rich console handler and an optional log file.

    Only the first call has an effect unless force is set.

    Args:
        level: Log level name, defaults to settings.log_level
        log_file: Path of the appending log file, defaults to settings.log_file.
            An empty string disables file logging.
        force: Replace handlers installed by an earlier call

    Returns:
        The root logger
    """
    global _initialized

    root = logging.getLogger()
    if _initialized and not force:
        return root

    level = (level or settings.log_level).upper()
    if log_file is None:
        log_file = settings.log_file

    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True),
    ]

    file_error = None
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            handlers.append(file_handler)
        except OSError as e:
            file_error = e

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)
    _initialized = True

    if file_error is not None:
        root.error("Failed to initialize file logging: %s", file_error)
    else:
        root.debug("Logging initialized (level=%s, file=%s)", level, log_file or "-")

    return root

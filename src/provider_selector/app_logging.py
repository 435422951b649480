"""
Application logging utilities.

Routes the package's standard library loggers to a Rich console handler
(or a plain stream handler) writing to stderr, so JSON written to stdout
by the CLI stays clean.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# Custom theme for log levels
_LOG_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "bold red",
    "logging.level.critical": "bold white on red",
    "log.time": "dim",
    "log.message": "default",
    "log.path": "dim",
})

_console = Console(theme=_LOG_THEME, stderr=True)

ROOT_LOGGER_NAME = 'provider_selector'

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Module-level cache for logger instances
_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    level: str = 'WARNING',
    log_format: Optional[str] = None,
    rich_output: bool = True,
    show_path: bool = False,
) -> None:
    """
    Setup logging for the provider_selector package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format string for the plain handler. If None, uses default format.
        rich_output: Use a Rich console handler instead of a plain stream handler
        show_path: Whether to show file path in Rich console logs
    """
    level_value = getattr(logging, level.upper())

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=_console,
            level=level_value,
            show_path=show_path,
            rich_tracebacks=True,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format or DEFAULT_LOG_FORMAT))
    handler.setLevel(level_value)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level_value)
    logger.handlers.clear()
    logger.addHandler(handler)
    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified component.

    The logger is a child of the 'provider_selector' root logger.

    Args:
        name: The name of the component (e.g., 'engine', 'catalog').
              Will be prefixed with 'provider_selector.' automatically.

    Usage:
        from provider_selector.app_logging import get_logger

        logger = get_logger("engine")
        logger.debug("Scored %d providers", 6)
    """
    full_name = f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME

    if full_name not in _loggers:
        logger = logging.getLogger(full_name)

        # Add NullHandler to prevent "No handler found" warnings
        # when setup_logging hasn't been called
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        _loggers[full_name] = logger

    return _loggers[full_name]


# Create root logger on module import with NullHandler
_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())

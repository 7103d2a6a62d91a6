"""Logging setup for the crowd density predictor.

All modules log through ``logging.getLogger(__name__)`` under the
``temple_crowd`` namespace; the CLI, dashboard and entry point call
``setup_logger`` once to attach console and optional file output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import LoggingConfig

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "temple_crowd"


def _build_handlers(log_file: Optional[str]) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    return handlers


def _clear_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logger(
    name: str = ROOT_LOGGER,
    log_file: Optional[str] = None,
    level: str = "INFO",
    reconfigure: bool = False,
) -> logging.Logger:
    """Attach formatted handlers to a logger.

    Repeated calls for a logger that already has handlers return it
    unchanged, so the dashboard can call this on every rerun.

    Args:
        name: Logger name. Defaults to the package namespace.
        log_file: Optional log file path; parent directories are created.
        level: Level name such as ``"DEBUG"`` or ``"INFO"``. Unknown names
            fall back to INFO.
        reconfigure: Close and replace existing handlers instead of
            returning the logger as is.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        if not reconfigure:
            return logger
        _clear_handlers(logger)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    for handler in _build_handlers(log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def setup_from_config(
    config: LoggingConfig,
    name: str = ROOT_LOGGER,
    level: Optional[str] = None,
) -> logging.Logger:
    """Configure the package logger from a ``LoggingConfig`` section.

    Existing handlers are replaced so each CLI run picks up its own config.
    ``level`` overrides the configured level, as ``--verbose`` does.
    """
    return setup_logger(
        name,
        log_file=config.file,
        level=level or config.level,
        reconfigure=True,
    )

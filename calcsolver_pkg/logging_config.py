"""Logging setup shared by the CLI, the Streamlit page and the library modules."""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "calcsolver"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return the package logger for a module, e.g. ``calcsolver.dispatch``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path; when given, records are also written there

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Re-running setup (REPL restarts, Streamlit reruns) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

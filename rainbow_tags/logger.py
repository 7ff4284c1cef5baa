"""Logging helpers for rainbow-tags.

Example:
    >>> from rainbow_tags.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rescanning document")
"""

from __future__ import annotations

import logging

import click

ROOT_LOGGER_NAME = "rainbow_tags"


class ClickEchoHandler(logging.Handler):
    """Write log records to stderr through `click.echo`."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``rainbow_tags``.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        logging.Logger: Standard library logger.

    Example:
        >>> get_logger("session").name
        'rainbow_tags.session'
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Route package log records to stderr.

    Args:
        verbose: Emit debug records when True, warnings and above otherwise.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(handler, ClickEchoHandler) for handler in logger.handlers):
        handler = ClickEchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

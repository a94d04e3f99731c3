"""Logging setup shared by the Quantum32 modules and the CLI."""

from __future__ import annotations

import logging
from typing import Optional, Union

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_NOISY_LOGGERS = ("urllib3", "requests")


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.INFO,
    handler: Optional[logging.Handler] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """Configure root logging once and return the logger for ``logger_name``.

    HTTP client loggers are held at WARNING so fetches do not flood the
    debate transcript.
    """
    logging.basicConfig(
        level=_resolve_level(level),
        format=_DEFAULT_FORMAT,
        handlers=[handler] if handler else None,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logging.getLogger(logger_name)


def set_level(level: Union[int, str]) -> None:
    """Change the root level after :func:`configure_logging` has run."""
    logging.getLogger().setLevel(_resolve_level(level))


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured for the given ``name``."""
    return logging.getLogger(name)

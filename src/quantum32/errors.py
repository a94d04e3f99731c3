"""Exception and warning types raised by the Quantum32 package."""

from __future__ import annotations


class Quantum32Error(Exception):
    """Base class for every error raised by the package."""


class FetchError(Quantum32Error):
    """The document source could not be reached or returned garbage."""


class DocumentNotFoundError(FetchError):
    """The document source has no page for the requested title."""

    def __init__(self, title: str, language: str) -> None:
        super().__init__(f"Document {title!r} not found ({language})")
        self.title = title
        self.language = language


class SessionStateError(Quantum32Error, RuntimeError):
    """An operation needs session state (analysis, connection) that is missing."""


class DebatePhaseError(Quantum32Error, RuntimeError):
    """A debate phase was invoked out of order."""


class DegenerateInputWarning(UserWarning):
    """The analysed text produced no usable tokens."""


__all__ = [
    "DebatePhaseError",
    "DegenerateInputWarning",
    "DocumentNotFoundError",
    "FetchError",
    "Quantum32Error",
    "SessionStateError",
]

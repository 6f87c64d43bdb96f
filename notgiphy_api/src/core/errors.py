"""Domain errors raised by stores and services.

Routes translate these into HTTP responses; nothing below the API layer
raises HTTPException.
"""

from __future__ import annotations


class NotGiphyError(Exception):
    """Base class for domain failures."""


class AlreadyExists(NotGiphyError):
    """A record with the same key already exists."""


class NotFound(NotGiphyError):
    """A referenced record does not exist."""


class InvalidCredentials(NotGiphyError):
    """Unknown user or wrong password."""


class InvalidSession(NotGiphyError):
    """Session token missing, unknown or expired."""

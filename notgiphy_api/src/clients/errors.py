"""Error types raised by the Giphy client."""

from __future__ import annotations

from typing import Any, Optional


class GiphyApiError(Exception):
    """Base error for Giphy API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code returned by Giphy.
        details: Optional response body for diagnosis.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details

"""Outbound HTTP clients."""

from .errors import GiphyApiError  # noqa: F401
from .giphy import GiphyClient  # noqa: F401

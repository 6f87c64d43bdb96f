"""Giphy API client

Thin async pass-through to the two Giphy endpoints the service needs:
lookup of a single GIF by id and keyword search. Responses are decoded into
DTOs and flattened into the API's `Gif` shape. There is no retry, caching or
rate-limit handling; every failure surfaces as ``GiphyApiError``.

>>> client = GiphyClient(api_key="...", per_page=25)
>>> gifs = await client.search("cats", page=2)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from src.schemas.favorites import Gif
from src.schemas.giphy import GiphyGetResponse, GiphySearchResponse
from .errors import GiphyApiError

DEFAULT_BASE_URL = "https://api.giphy.com/v1"


class GiphyClient:
    """Async client for GIF lookup and search."""

    def __init__(
        self,
        api_key: str,
        *,
        per_page: int = 25,
        rating: str = "g",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create a Giphy client.

        Args:
            api_key: Giphy API key sent as the ``api_key`` query parameter.
            per_page: Search results per page; values below 1 are raised to 1.
            rating: Content rating filter for searches.
            base_url: API root, e.g. ``https://api.giphy.com/v1``.
            timeout: Default HTTP timeout for the internal client.
            client: Optional preconfigured ``httpx.AsyncClient`` to use.
        """
        self.api_key = api_key
        self.per_page = max(1, per_page)
        self.rating = rating
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: Dict[str, Any], *, allow_404: bool = False) -> Optional[Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = await self._client.get(url, params={"api_key": self.api_key, **params})
        except httpx.HTTPError as exc:
            self._logger.warning("Giphy request to %s failed: %s", path, exc)
            raise GiphyApiError(f"Request to Giphy failed: {exc}") from exc

        if allow_404 and resp.status_code == 404:
            return None
        if resp.status_code >= 400:
            self._logger.warning("Giphy %s returned HTTP %s", path, resp.status_code)
            raise GiphyApiError(
                f"Giphy returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                details=resp.text,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise GiphyApiError("Giphy returned invalid JSON", status_code=resp.status_code, details=resp.text) from exc

    # PUBLIC_INTERFACE
    async def get(self, gif_id: str) -> Optional[Gif]:
        """Return the GIF with the given id, or None when Giphy does not know it."""
        body = await self._get_json(f"/gifs/{quote(gif_id, safe='')}", {}, allow_404=True)
        if body is None:
            return None
        try:
            parsed = GiphyGetResponse.model_validate(body)
        except ValidationError as exc:
            raise GiphyApiError("Unexpected Giphy response", details=body) from exc
        if parsed.data is None or not parsed.data.id:
            return None
        return parsed.data.to_gif()

    # PUBLIC_INTERFACE
    async def search(self, query: str, page: int = 1) -> List[Gif]:
        """Search GIFs by keyword; ``page`` is 1-based and values below 1 mean 1."""
        page = max(1, page)
        params = {
            "rating": self.rating,
            "q": query,
            "limit": str(self.per_page),
            "offset": str((page - 1) * self.per_page),
        }
        body = await self._get_json("/gifs/search", params)
        try:
            parsed = GiphySearchResponse.model_validate(body)
        except ValidationError as exc:
            raise GiphyApiError("Unexpected Giphy response", details=body) from exc
        return [item.to_gif() for item in parsed.data if item.id]

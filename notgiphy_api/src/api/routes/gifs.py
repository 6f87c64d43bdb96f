from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from src.clients.errors import GiphyApiError
from src.clients.giphy import GiphyClient
from src.core.deps import get_gif_client
from src.schemas.favorites import Gif

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gifs", tags=["Gifs"])


def parse_page(p: Optional[str]) -> int:
    """Parse a 1-based page number; anything unparsable or below 1 means page 1."""
    try:
        page = int(p) if p is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


async def search_gifs(client: GiphyClient, q: str, p: Optional[str]) -> List[Gif]:
    """Run a Giphy search, mapping provider failures to 502."""
    try:
        return await client.search(q, parse_page(p))
    except GiphyApiError as exc:
        logger.error("Giphy search failed: %s", exc)
        raise HTTPException(status_code=502, detail="GIF provider request failed")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=Union[Gif, List[Gif]],
    summary="Look up or search GIFs",
    description="With `id`, return one GIF from the provider. With `q`, search (page `p`, 1-based).",
)
async def read_gifs(
    id: Optional[str] = Query(None, description="Provider GIF id"),
    q: Optional[str] = Query(None, description="Search keywords"),
    p: Optional[str] = Query(None, description="Page number, 1-based"),
    client: GiphyClient = Depends(get_gif_client),
) -> Union[Gif, List[Gif]]:
    if id:
        try:
            gif = await client.get(id)
        except GiphyApiError as exc:
            logger.error("Giphy lookup of %s failed: %s", id, exc)
            raise HTTPException(status_code=502, detail="GIF provider request failed")
        if gif is None:
            raise HTTPException(status_code=404, detail=f"GIF {id} not found")
        return gif
    if q:
        return await search_gifs(client, q, p)
    raise HTTPException(status_code=400, detail="Missing id")

from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.core.deps import get_favorites_service
from src.core.errors import AlreadyExists
from src.schemas.favorites import Gif
from src.services.favorites import FavoritesService

router = APIRouter(prefix="/favorites", tags=["Favorites"])


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Gif,
    status_code=status.HTTP_201_CREATED,
    summary="Save a favorite",
)
async def create_favorite(
    payload: Gif,
    service: FavoritesService = Depends(get_favorites_service),
) -> Gif:
    """Save a GIF as a favorite of the current user."""
    try:
        return await service.add_favorite(payload)
    except AlreadyExists:
        raise HTTPException(status_code=400, detail=f"Favorite {payload.id} already exists")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=Union[Gif, List[Gif]],
    summary="Get favorites",
    description=(
        "With `id`, return that favorite. With `tag`, list favorites carrying the tag. "
        "Otherwise list all favorites ordered by id."
    ),
)
async def read_favorites(
    id: Optional[str] = Query(None, description="Favorite id"),
    tag: Optional[str] = Query(None, description="Only favorites with this tag"),
    service: FavoritesService = Depends(get_favorites_service),
) -> Union[Gif, List[Gif]]:
    if id:
        gif = await service.get_favorite(id)
        if gif is None:
            raise HTTPException(status_code=404, detail=f"Favorite {id} not found")
        return gif
    return await service.list_favorites(tag=tag)


# PUBLIC_INTERFACE
@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a favorite",
    description="Delete the favorite and all of its tags. Deleting an unknown id succeeds.",
)
async def delete_favorite(
    id: str = Query(..., min_length=1, description="Favorite id"),
    service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    await service.remove_favorite(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

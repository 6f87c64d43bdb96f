from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.core.deps import get_favorites_service
from src.core.errors import AlreadyExists, NotFound
from src.schemas.favorites import Tag
from src.services.favorites import FavoritesService

router = APIRouter(prefix="/tags", tags=["Tags"])


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Tag,
    status_code=status.HTTP_201_CREATED,
    summary="Tag a favorite",
)
async def create_tag(
    payload: Tag,
    service: FavoritesService = Depends(get_favorites_service),
) -> Tag:
    """Attach a tag to one of the current user's favorites."""
    try:
        return await service.add_tag(payload)
    except NotFound as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except AlreadyExists:
        raise HTTPException(status_code=400, detail=f"Tag {payload.tag} already exists on {payload.favorite}")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[Tag],
    summary="List tags",
    description="With `favorite`, that favorite's tags. Otherwise one entry per distinct tag.",
)
async def list_tags(
    favorite: Optional[str] = Query(None, description="Favorite id"),
    service: FavoritesService = Depends(get_favorites_service),
) -> List[Tag]:
    return await service.list_tags(favorite=favorite)


# PUBLIC_INTERFACE
@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove a tag",
)
async def delete_tag(
    favorite: str = Query(..., min_length=1, description="Favorite id"),
    tag: str = Query(..., min_length=1, description="Tag name"),
    service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    await service.remove_tag(Tag(favorite=favorite, tag=tag))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

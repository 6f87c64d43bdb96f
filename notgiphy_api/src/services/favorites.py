from __future__ import annotations

import logging
from typing import List, Optional

from src.repositories.store import Store
from src.schemas.favorites import Gif, Tag
from src.services.base import BaseService

logger = logging.getLogger(__name__)


class FavoritesService(BaseService):
    """
    Favorites and tags of one user.

    Store errors (AlreadyExists, NotFound) propagate to the caller unchanged.
    """

    def __init__(self, store: Store, user: str) -> None:
        super().__init__(store)
        self.user = user

    # PUBLIC_INTERFACE
    async def add_favorite(self, gif: Gif) -> Gif:
        created = await self.store.favorite_create(self.user, gif)
        logger.info("Saved favorite %s", gif.id)
        return created

    # PUBLIC_INTERFACE
    async def get_favorite(self, favorite_id: str) -> Optional[Gif]:
        return await self.store.favorite_get(self.user, favorite_id)

    # PUBLIC_INTERFACE
    async def list_favorites(self, tag: Optional[str] = None) -> List[Gif]:
        """All favorites ordered by id, or only those carrying `tag`."""
        return await self.store.favorite_list(self.user, tag=tag or None)

    # PUBLIC_INTERFACE
    async def remove_favorite(self, favorite_id: str) -> None:
        """Delete a favorite together with its tags. Unknown ids are ignored."""
        if await self.store.favorite_delete(self.user, favorite_id):
            logger.info("Removed favorite %s", favorite_id)

    # PUBLIC_INTERFACE
    async def add_tag(self, tag: Tag) -> Tag:
        created = await self.store.tag_create(self.user, tag)
        logger.info("Tagged favorite %s with %r", tag.favorite, tag.tag)
        return created

    # PUBLIC_INTERFACE
    async def list_tags(self, favorite: Optional[str] = None) -> List[Tag]:
        """Tags of one favorite, or every distinct tag of the user."""
        return await self.store.tag_list(self.user, favorite=favorite or None)

    # PUBLIC_INTERFACE
    async def remove_tag(self, tag: Tag) -> None:
        if await self.store.tag_delete(self.user, tag):
            logger.info("Removed tag %r from favorite %s", tag.tag, tag.favorite)

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select

from src.db.models.favorites import Favorite, Tag
from .base import BaseRepository


class FavoriteRepository(BaseRepository):
    """Repository for favorites. Every query is scoped to one user."""

    async def get_favorite(self, user: str, favorite_id: str) -> Optional[Favorite]:
        stmt = select(Favorite).where(Favorite.id == favorite_id, Favorite.user == user)
        return await self.scalar_one_or_none(stmt)

    async def list_favorites(self, user: str, *, tag: Optional[str] = None) -> List[Favorite]:
        stmt = select(Favorite).where(Favorite.user == user)
        if tag:
            stmt = stmt.join(
                Tag, (Tag.favorite == Favorite.id) & (Tag.user == Favorite.user)
            ).where(Tag.tag == tag)
        stmt = stmt.order_by(Favorite.id)
        result = await self.scalars(stmt)
        return list(result)

    async def create_favorite(
        self, *, user: str, favorite_id: str, url: str, still_url: str, downsized_url: str
    ) -> Favorite:
        favorite = Favorite(
            id=favorite_id,
            user=user,
            url=url,
            still_url=still_url,
            downsized_url=downsized_url,
        )
        await self.add(favorite)
        return favorite

    async def delete_favorite(self, user: str, favorite_id: str) -> int:
        stmt = delete(Favorite).where(Favorite.id == favorite_id, Favorite.user == user)
        result = await self.execute(stmt)
        return result.rowcount or 0


class TagRepository(BaseRepository):
    """Repository for tags on favorites."""

    async def get_tag(self, user: str, favorite_id: str, tag: str) -> Optional[Tag]:
        stmt = select(Tag).where(Tag.user == user, Tag.favorite == favorite_id, Tag.tag == tag)
        return await self.scalar_one_or_none(stmt)

    async def list_tags_for_favorite(self, user: str, favorite_id: str) -> List[Tag]:
        stmt = (
            select(Tag)
            .where(Tag.user == user, Tag.favorite == favorite_id)
            .order_by(Tag.tag)
        )
        result = await self.scalars(stmt)
        return list(result)

    async def list_distinct_tags(self, user: str) -> List[Tuple[str, str]]:
        """Return (tag, lowest favorite id) pairs, one per tag name."""
        stmt = (
            select(Tag.tag, func.min(Tag.favorite))
            .where(Tag.user == user)
            .group_by(Tag.tag)
            .order_by(Tag.tag)
        )
        result = await self.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def create_tag(self, *, user: str, favorite_id: str, tag: str) -> Tag:
        record = Tag(tag=tag, user=user, favorite=favorite_id)
        await self.add(record)
        return record

    async def delete_tag(self, user: str, favorite_id: str, tag: str) -> int:
        stmt = delete(Tag).where(Tag.user == user, Tag.favorite == favorite_id, Tag.tag == tag)
        result = await self.execute(stmt)
        return result.rowcount or 0

    async def delete_tags_for_favorite(self, user: str, favorite_id: str) -> None:
        await self.execute(delete(Tag).where(Tag.user == user, Tag.favorite == favorite_id))

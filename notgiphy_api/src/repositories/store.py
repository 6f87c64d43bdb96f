"""Store interface and its relational implementation.

The API layer talks to a `Store`. `SqlStore` composes the SQLAlchemy
repositories over one AsyncSession; `MemoryStore` (see memory.py) keeps
everything in process.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import AlreadyExists, NotFound
from src.schemas.auth import AccountRecord, SessionRecord
from src.schemas.favorites import Gif, Tag
from .accounts import AccountRepository, SessionRepository
from .favorites import FavoriteRepository, TagRepository


class Store(Protocol):
    """Persistence operations used by the services."""

    async def account_create(self, user: str, hashed_password: str) -> None: ...

    async def account_get(self, user: str) -> Optional[AccountRecord]: ...

    async def session_replace(self, user: str, token: str) -> SessionRecord: ...

    async def session_get(self, token: str) -> Optional[SessionRecord]: ...

    async def session_delete(self, token: str) -> None: ...

    async def favorite_create(self, user: str, gif: Gif) -> Gif: ...

    async def favorite_get(self, user: str, favorite_id: str) -> Optional[Gif]: ...

    async def favorite_list(self, user: str, tag: Optional[str] = None) -> List[Gif]: ...

    async def favorite_delete(self, user: str, favorite_id: str) -> bool: ...

    async def tag_create(self, user: str, tag: Tag) -> Tag: ...

    async def tag_list(self, user: str, favorite: Optional[str] = None) -> List[Tag]: ...

    async def tag_delete(self, user: str, tag: Tag) -> bool: ...


class SqlStore:
    """Store backed by the relational database."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.accounts = AccountRepository(session)
        self.sessions = SessionRepository(session)
        self.favorites = FavoriteRepository(session)
        self.tags = TagRepository(session)

    # Accounts
    async def account_create(self, user: str, hashed_password: str) -> None:
        async with self.accounts.transaction():
            if await self.accounts.get_account(user) is not None:
                raise AlreadyExists(f"User {user!r} already exists")
            await self.accounts.create_account(user=user, hashed_password=hashed_password)

    async def account_get(self, user: str) -> Optional[AccountRecord]:
        account = await self.accounts.get_account(user)
        return AccountRecord.model_validate(account) if account else None

    # Sessions
    async def session_replace(self, user: str, token: str) -> SessionRecord:
        async with self.sessions.transaction():
            if await self.accounts.get_account(user) is None:
                raise NotFound(f"No account for {user!r}")
            await self.sessions.delete_sessions_for_user(user)
            record = await self.sessions.create_session(token=token, user=user)
        return SessionRecord.model_validate(record)

    async def session_get(self, token: str) -> Optional[SessionRecord]:
        record = await self.sessions.get_session(token)
        return SessionRecord.model_validate(record) if record else None

    async def session_delete(self, token: str) -> None:
        async with self.sessions.transaction():
            await self.sessions.delete_session(token)

    # Favorites
    async def favorite_create(self, user: str, gif: Gif) -> Gif:
        async with self.favorites.transaction():
            if await self.favorites.get_favorite(user, gif.id) is not None:
                raise AlreadyExists(f"Favorite {gif.id!r} already exists")
            favorite = await self.favorites.create_favorite(
                user=user,
                favorite_id=gif.id,
                url=gif.url,
                still_url=gif.still_url,
                downsized_url=gif.downsized_url,
            )
        return Gif.model_validate(favorite)

    async def favorite_get(self, user: str, favorite_id: str) -> Optional[Gif]:
        favorite = await self.favorites.get_favorite(user, favorite_id)
        return Gif.model_validate(favorite) if favorite else None

    async def favorite_list(self, user: str, tag: Optional[str] = None) -> List[Gif]:
        records = await self.favorites.list_favorites(user, tag=tag)
        return [Gif.model_validate(r) for r in records]

    async def favorite_delete(self, user: str, favorite_id: str) -> bool:
        async with self.favorites.transaction():
            await self.tags.delete_tags_for_favorite(user, favorite_id)
            removed = await self.favorites.delete_favorite(user, favorite_id)
        return removed > 0

    # Tags
    async def tag_create(self, user: str, tag: Tag) -> Tag:
        async with self.tags.transaction():
            if await self.favorites.get_favorite(user, tag.favorite) is None:
                raise NotFound(f"No favorite {tag.favorite!r}")
            if await self.tags.get_tag(user, tag.favorite, tag.tag) is not None:
                raise AlreadyExists(f"Tag {tag.tag!r} already exists on {tag.favorite!r}")
            record = await self.tags.create_tag(user=user, favorite_id=tag.favorite, tag=tag.tag)
        return Tag.model_validate(record)

    async def tag_list(self, user: str, favorite: Optional[str] = None) -> List[Tag]:
        if favorite:
            records = await self.tags.list_tags_for_favorite(user, favorite)
            return [Tag.model_validate(r) for r in records]
        pairs = await self.tags.list_distinct_tags(user)
        return [Tag(tag=name, favorite=fav) for name, fav in pairs]

    async def tag_delete(self, user: str, tag: Tag) -> bool:
        async with self.tags.transaction():
            removed = await self.tags.delete_tag(user, tag.favorite, tag.tag)
        return removed > 0

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Set, Tuple

from src.core.errors import AlreadyExists, NotFound
from src.db.base import utcnow
from src.schemas.auth import AccountRecord, SessionRecord
from src.schemas.favorites import Gif, Tag


class MemoryStore:
    """
    In-process store holding everything in dicts.

    A single asyncio.Lock guards all maps, so every operation is atomic with
    respect to the others. Data is lost when the process exits.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._accounts: Dict[str, AccountRecord] = {}
        self._sessions: Dict[str, SessionRecord] = {}
        # (user, favorite id) -> Gif
        self._favorites: Dict[Tuple[str, str], Gif] = {}
        # (user, favorite id, tag)
        self._tags: Set[Tuple[str, str, str]] = set()

    # Accounts
    async def account_create(self, user: str, hashed_password: str) -> None:
        async with self._lock:
            if user in self._accounts:
                raise AlreadyExists(f"User {user!r} already exists")
            self._accounts[user] = AccountRecord(user=user, hashed_password=hashed_password)

    async def account_get(self, user: str) -> Optional[AccountRecord]:
        async with self._lock:
            return self._accounts.get(user)

    # Sessions
    async def session_replace(self, user: str, token: str) -> SessionRecord:
        async with self._lock:
            if user not in self._accounts:
                raise NotFound(f"No account for {user!r}")
            for existing, record in list(self._sessions.items()):
                if record.user == user:
                    del self._sessions[existing]
            record = SessionRecord(id=token, user=user, created_at=utcnow())
            self._sessions[token] = record
            return record

    async def session_get(self, token: str) -> Optional[SessionRecord]:
        async with self._lock:
            return self._sessions.get(token)

    async def session_delete(self, token: str) -> None:
        async with self._lock:
            self._sessions.pop(token, None)

    # Favorites
    async def favorite_create(self, user: str, gif: Gif) -> Gif:
        async with self._lock:
            key = (user, gif.id)
            if key in self._favorites:
                raise AlreadyExists(f"Favorite {gif.id!r} already exists")
            self._favorites[key] = gif.model_copy()
            return gif.model_copy()

    async def favorite_get(self, user: str, favorite_id: str) -> Optional[Gif]:
        async with self._lock:
            gif = self._favorites.get((user, favorite_id))
            return gif.model_copy() if gif else None

    async def favorite_list(self, user: str, tag: Optional[str] = None) -> List[Gif]:
        async with self._lock:
            if tag:
                ids = {fav for (u, fav, t) in self._tags if u == user and t == tag}
            else:
                ids = {fav for (u, fav) in self._favorites if u == user}
            return [self._favorites[(user, fav)].model_copy() for fav in sorted(ids)]

    async def favorite_delete(self, user: str, favorite_id: str) -> bool:
        async with self._lock:
            self._tags = {t for t in self._tags if not (t[0] == user and t[1] == favorite_id)}
            return self._favorites.pop((user, favorite_id), None) is not None

    # Tags
    async def tag_create(self, user: str, tag: Tag) -> Tag:
        async with self._lock:
            if (user, tag.favorite) not in self._favorites:
                raise NotFound(f"No favorite {tag.favorite!r}")
            key = (user, tag.favorite, tag.tag)
            if key in self._tags:
                raise AlreadyExists(f"Tag {tag.tag!r} already exists on {tag.favorite!r}")
            self._tags.add(key)
            return tag.model_copy()

    async def tag_list(self, user: str, favorite: Optional[str] = None) -> List[Tag]:
        async with self._lock:
            if favorite:
                names = sorted(t for (u, fav, t) in self._tags if u == user and fav == favorite)
                return [Tag(favorite=favorite, tag=name) for name in names]
            lowest: Dict[str, str] = {}
            for u, fav, name in self._tags:
                if u == user and (name not in lowest or fav < lowest[name]):
                    lowest[name] = fav
            return [Tag(favorite=lowest[name], tag=name) for name in sorted(lowest)]

    async def tag_delete(self, user: str, tag: Tag) -> bool:
        async with self._lock:
            key = (user, tag.favorite, tag.tag)
            if key in self._tags:
                self._tags.remove(key)
                return True
            return False

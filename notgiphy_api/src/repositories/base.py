from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy import Executable
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import AlreadyExists


class BaseRepository:
    """
    Base class for repositories providing common helpers.

    Repositories never commit on their own; writes are grouped by the caller
    inside `transaction()` so multi-statement operations stay atomic.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        return await self.session.execute(statement, params or {})

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return scalars."""
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one_or_none(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return a single scalar or None."""
        result = await self.execute(statement, params)
        return result.scalar_one_or_none()

    async def add(self, entity: Any) -> None:
        """Add a single entity to session and flush it so constraint errors surface here."""
        self.session.add(entity)
        await self.session.flush()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Commit on success, roll back on any failure.

        Integrity violations are re-raised as AlreadyExists.
        """
        try:
            yield self.session
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise AlreadyExists(str(exc.orig)) from exc
        except BaseException:
            await self.session.rollback()
            raise

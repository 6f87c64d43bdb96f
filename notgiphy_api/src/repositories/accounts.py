from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select

from src.db.models.accounts import Account, LoginSession
from .base import BaseRepository


class AccountRepository(BaseRepository):
    """Repository for accounts."""

    async def get_account(self, user: str) -> Optional[Account]:
        stmt = select(Account).where(Account.user == user)
        return await self.scalar_one_or_none(stmt)

    async def create_account(self, *, user: str, hashed_password: str) -> Account:
        account = Account(user=user, hashed_password=hashed_password)
        await self.add(account)
        return account


class SessionRepository(BaseRepository):
    """Repository for login sessions."""

    async def get_session(self, token: str) -> Optional[LoginSession]:
        stmt = select(LoginSession).where(LoginSession.id == token)
        return await self.scalar_one_or_none(stmt)

    async def create_session(self, *, token: str, user: str) -> LoginSession:
        record = LoginSession(id=token, user=user)
        await self.add(record)
        return record

    async def delete_sessions_for_user(self, user: str) -> None:
        await self.execute(delete(LoginSession).where(LoginSession.user == user))

    async def delete_session(self, token: str) -> None:
        await self.execute(delete(LoginSession).where(LoginSession.id == token))

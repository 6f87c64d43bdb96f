from __future__ import annotations

import logging

from src.core.errors import AlreadyExists, InvalidCredentials, InvalidSession, NotFound
from src.core.security import (
    get_password_hash,
    new_session_token,
    session_expired,
    verify_password,
)
from src.repositories.store import Store
from src.schemas.auth import SessionRecord
from src.services.base import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Account registration, login and session resolution.

    Each user holds at most one live session: logging in again replaces the
    previous token.
    """

    def __init__(self, store: Store, *, session_ttl_hours: int = 24) -> None:
        super().__init__(store)
        self.session_ttl_hours = session_ttl_hours

    # PUBLIC_INTERFACE
    async def register(self, user: str, password: str) -> SessionRecord:
        """Create an account and log it in. Raises AlreadyExists for a taken user name."""
        if not user.strip() or not password.strip():
            raise InvalidCredentials("User and password are required")
        try:
            await self.store.account_create(user, get_password_hash(password))
        except AlreadyExists:
            raise AlreadyExists("User already exists")
        logger.info("Registered account %s", user)
        return await self.login(user, password)

    # PUBLIC_INTERFACE
    async def login(self, user: str, password: str) -> SessionRecord:
        """Verify credentials and issue a new session, dropping any previous one."""
        account = await self.store.account_get(user)
        if account is None or not verify_password(password, account.hashed_password):
            raise InvalidCredentials("Invalid user or password")
        try:
            record = await self._issue_session(user)
        except NotFound:
            # Account removed between lookup and session insert
            raise InvalidCredentials("Invalid user or password")
        logger.info("Issued session for %s", user)
        return record

    async def _issue_session(self, user: str) -> SessionRecord:
        try:
            return await self.store.session_replace(user, new_session_token())
        except AlreadyExists:
            # A concurrent login for the same user inserted its session first
            logger.info("Session for %s was replaced concurrently; retrying", user)
            return await self.store.session_replace(user, new_session_token())

    # PUBLIC_INTERFACE
    async def resolve(self, token: str | None) -> str:
        """Return the user owning `token`. Raises InvalidSession when missing, unknown or expired."""
        if not token:
            raise InvalidSession("Missing session cookie")
        record = await self.store.session_get(token)
        if record is None:
            raise InvalidSession("Invalid session")
        if session_expired(record.created_at, self.session_ttl_hours):
            await self.store.session_delete(token)
            raise InvalidSession("Session expired")
        return record.user

    # PUBLIC_INTERFACE
    async def logout(self, token: str | None) -> None:
        """Forget the session, if any."""
        if token:
            await self.store.session_delete(token)

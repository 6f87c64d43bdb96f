from __future__ import annotations

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status

from src.clients.giphy import GiphyClient
from src.core.errors import InvalidSession
from src.core.logging import user_var
from src.core.settings import AppSettings
from src.db.session import get_async_session
from src.repositories.store import SqlStore, Store
from src.services.auth import AuthService
from src.services.favorites import FavoritesService

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def get_settings_dep(request: Request) -> AppSettings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


# PUBLIC_INTERFACE
async def get_store(request: Request) -> AsyncGenerator[Store, None]:
    """
    Yield the store for this request.

    The in-memory store is shared by the whole application; the SQL store wraps
    a fresh AsyncSession that is closed when the request ends.
    """
    memory_store = getattr(request.app.state, "memory_store", None)
    if memory_store is not None:
        yield memory_store
        return
    async for session in get_async_session():
        yield SqlStore(session)


# PUBLIC_INTERFACE
def get_auth_service(
    store: Store = Depends(get_store),
    settings: AppSettings = Depends(get_settings_dep),
) -> AuthService:
    return AuthService(store, session_ttl_hours=settings.SESSION_TTL_HOURS)


# PUBLIC_INTERFACE
def get_session_token(
    request: Request, settings: AppSettings = Depends(get_settings_dep)
) -> str | None:
    """Read the session token from the session cookie, if present."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


# PUBLIC_INTERFACE
async def get_current_user(
    request: Request,
    token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """
    Resolve the session cookie to a user name.

    Raises:
        HTTPException: 401 when the cookie is missing, unknown or expired.
    """
    try:
        user = await auth.resolve(token)
    except InvalidSession as exc:
        logger.info("Rejected request: %s", exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    user_var.set(user)
    request.state.user = user
    return user


# PUBLIC_INTERFACE
def get_favorites_service(
    user: str = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> FavoritesService:
    """FavoritesService bound to the authenticated user."""
    return FavoritesService(store, user)


# PUBLIC_INTERFACE
def get_gif_client(request: Request) -> GiphyClient:
    """Return the application's shared Giphy client."""
    return request.app.state.gif_client

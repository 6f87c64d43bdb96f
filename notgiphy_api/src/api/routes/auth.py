from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, Response, status

from src.core.deps import (
    get_auth_service,
    get_current_user,
    get_session_token,
    get_settings_dep,
)
from src.core.errors import AlreadyExists, InvalidCredentials
from src.core.settings import AppSettings
from src.schemas.auth import AccountRead, SessionRecord
from src.schemas.common import MessageResponse
from src.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


def _set_session_cookie(response: Response, record: SessionRecord, settings: AppSettings) -> None:
    max_age = settings.SESSION_TTL_HOURS * 3600
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=record.id,
        max_age=max_age,
        expires=max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=MessageResponse,
    summary="Login",
    description="Authenticate with form fields `user` and `password`; sets the session cookie.",
)
async def login(
    response: Response,
    user: str = Form("", description="User name"),
    password: str = Form("", description="Password"),
    auth: AuthService = Depends(get_auth_service),
    settings: AppSettings = Depends(get_settings_dep),
) -> MessageResponse:
    """Log in, replacing any earlier session of the same user."""
    try:
        record = await auth.login(user, password)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except AlreadyExists:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Concurrent login, try again")
    _set_session_cookie(response, record, settings)
    return MessageResponse(message="Success")


# PUBLIC_INTERFACE
@router.put(
    "",
    response_model=MessageResponse,
    summary="Register",
    description="Create an account from form fields `user` and `password` and log it in.",
)
async def register(
    response: Response,
    user: str = Form("", description="User name"),
    password: str = Form("", description="Password"),
    auth: AuthService = Depends(get_auth_service),
    settings: AppSettings = Depends(get_settings_dep),
) -> MessageResponse:
    """Register a new account and set its session cookie."""
    try:
        record = await auth.register(user, password)
    except (AlreadyExists, InvalidCredentials) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    _set_session_cookie(response, record, settings)
    return MessageResponse(message="Success")


# PUBLIC_INTERFACE
@router.delete(
    "",
    response_model=MessageResponse,
    summary="Logout",
    description="Delete the current session (if any) and clear the cookie.",
)
async def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
    settings: AppSettings = Depends(get_settings_dep),
) -> MessageResponse:
    await auth.logout(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return MessageResponse(message="Logged out")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=AccountRead,
    summary="Read current user",
    description="Return the user owning the session cookie.",
)
async def read_current_user(user: str = Depends(get_current_user)) -> AccountRead:
    return AccountRead(user=user)

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash."""
    return _pwd_context.verify(plain_password, hashed_password)


# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return _pwd_context.hash(password)


# PUBLIC_INTERFACE
def new_session_token() -> str:
    """Return a fresh random opaque session token."""
    return str(uuid4())


# PUBLIC_INTERFACE
def session_expired(created_at: datetime, ttl_hours: int, now: datetime | None = None) -> bool:
    """
    Return True when a session created at `created_at` is older than `ttl_hours`.

    Naive timestamps (SQLite drops tzinfo) are treated as UTC.
    """
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(tz=timezone.utc)
    return now - created_at > timedelta(hours=ttl_hours)

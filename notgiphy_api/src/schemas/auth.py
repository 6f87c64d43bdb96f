from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AccountRead(BaseModel):
    """Public view of an account."""
    user: str = Field(..., description="User name")


class AccountRecord(BaseModel):
    """Stored account, including the password hash."""
    model_config = ConfigDict(from_attributes=True)

    user: str
    hashed_password: str


class SessionRecord(BaseModel):
    """Stored login session."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Opaque session token")
    user: str = Field(..., description="Owner of the session")
    created_at: datetime = Field(..., description="When the session was issued")

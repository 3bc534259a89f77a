"""Pydantic models for users, sessions and the team directory."""

from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    """Identity returned by a login."""

    id: str
    email: str
    name: str
    avatar: str | None = None
    created_at: datetime


class AuthSession(BaseModel):
    """Stored login session."""

    user: User
    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class LoginRequest(BaseModel):
    """Request model for a login."""

    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    success: bool = True
    user: User
    token: str
    message: str = "Login successful"


class DirectoryUser(BaseModel):
    """Team-directory record, unrelated to the login identity."""

    id: str
    name: str
    email: str
    role: str
    avatar: str | None = None
    joined_at: datetime

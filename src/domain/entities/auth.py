"""Identities issued by the auth provider."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthUser:
    """A user record held by the auth provider."""

    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class AuthSession:
    """A signed-in session."""

    access_token: str
    user: AuthUser


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller of a request."""

    supabase_id: str
    access_token: str
    email: Optional[str] = None

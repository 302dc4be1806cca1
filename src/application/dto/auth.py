"""Data transfer objects for signup and login."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Role(str, Enum):
    TENANT = "tenant"
    LANDLORD = "landlord"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class SignupRequest:
    """Input data for creating a tenant or landlord account."""
    first_name: Optional[str]
    last_name: Optional[str]
    email: Optional[str]
    password: Optional[str] = None
    is_oauth: bool = False

    def missing_fields(self) -> List[str]:
        missing = [
            name
            for name in ("first_name", "last_name", "email")
            if not (getattr(self, name) or "").strip()
        ]
        if not self.is_oauth and not self.password:
            missing.append("password")
        return missing


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str


@dataclass(frozen=True)
class SignupResult:
    user_id: str
    created: bool

"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Role, User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Command to register a new user"""

    email: str
    password: str
    name: str
    role: Optional[Role] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserResponse(BaseModel):
    """Public view of a user"""

    id: str
    email: str
    name: str
    role: Role
    created_at: datetime
    last_login: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=user.role,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    user: UserResponse
    access_token: str
    refresh_token: str


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
    session_id: str

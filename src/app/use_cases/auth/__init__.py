"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase, LogoutAllUseCase
from .dtos import (
    RegisterCommand,
    UserResponse,
    AuthResponse,
    RefreshTokenResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "UserResponse",
    "AuthResponse",
    "RefreshTokenResponse",
]

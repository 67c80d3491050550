"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, refresh and logout flows
- users/: Profile management
- sessions/: Session listing, revocation and sweeping
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    LogoutAllUseCase,
)
from .users import (
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from .sessions import (
    ListSessionsUseCase,
    RevokeSessionUseCase,
    SweepExpiredSessionsUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllUseCase",
    # Users
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    # Sessions
    "ListSessionsUseCase",
    "RevokeSessionUseCase",
    "SweepExpiredSessionsUseCase",
]

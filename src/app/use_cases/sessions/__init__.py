"""
Session Management Use Cases

Listing, revoking and sweeping sessions.
"""

from .list_sessions_use_case import ListSessionsUseCase
from .revoke_session_use_case import RevokeSessionUseCase
from .sweep_expired_sessions_use_case import SweepExpiredSessionsUseCase

__all__ = [
    "ListSessionsUseCase",
    "RevokeSessionUseCase",
    "SweepExpiredSessionsUseCase",
]

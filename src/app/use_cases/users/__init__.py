"""
User Management Use Cases

All user-related business logic.
"""

from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase

__all__ = [
    "GetProfileUseCase",
    "UpdateProfileUseCase",
]

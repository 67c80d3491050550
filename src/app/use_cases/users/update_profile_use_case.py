"""
Update Profile Use Case

Lets a user change their display name and email.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserResponse
from src.libs.result import Error, Result, Return


class UpdateProfileUseCase:
    """
    Use case for profile updates.

    Business Rules:
    - Only supplied fields change
    - Email stays unique (lower-cased)
    - Access tokens issued before the change keep the old email claim
      until they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Result[UserResponse]:
        """
        Execute update profile use case.

        Args:
            user_id: User UUID from the access token
            name: New display name
            email: New email

        Returns:
            Result with updated UserResponse, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if email is not None:
                existing = await self.uow.users.get_by_email(email.lower())
                if existing is not None and existing.id != user_id:
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "Email already in use")
                    )
                user.email = email.lower()

            if name is not None:
                user.name = name

            await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(UserResponse.from_entity(user))

"""
Register Use Case

Creates user accounts. The first account becomes ADMIN; afterwards only
admins may choose a role.
"""

from typing import Optional, Tuple

from src.app.services.password_hasher import hash_password
from src.app.services.token_lifecycle import TokenLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Role, User
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, RegisterCommand, UserResponse


class RegisterUseCase:
    """
    Use case for user registration.

    Business Rules:
    - Email must be unique (compared lower-cased)
    - First user is always ADMIN
    - Later users default to MEMBER
    - Requesting a role requires an ADMIN creator
    - Self-registration signs the user in; admin-created accounts get no tokens
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenLifecycleManager):
        self.uow = uow
        self.tokens = tokens

    async def execute(
        self,
        command: RegisterCommand,
        creator_role: Optional[Role] = None,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[AuthResponse]:
        """
        Register a user and issue a token pair for them.

        Args:
            command: Registration data
            creator_role: Role of the authenticated creator, if any
            user_agent: Client user agent for the new session
            ip_address: Client IP for the new session

        Returns:
            Result with AuthResponse, or Error
        """
        result = await self._create_user(command, creator_role)
        if result.is_err():
            return result

        user, user_response = result.value
        pair = await self.tokens.issue(
            user.id, user.email, user.role, user_agent, ip_address
        )

        return Return.ok(
            AuthResponse(
                user=user_response,
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
            )
        )

    async def create_by_admin(
        self, command: RegisterCommand, creator_role: Role
    ) -> Result[UserResponse]:
        """Create an account on behalf of an admin without signing it in."""
        result = await self._create_user(command, creator_role)
        if result.is_err():
            return result
        return Return.ok(result.value[1])

    async def _create_user(
        self, command: RegisterCommand, creator_role: Optional[Role]
    ) -> Result[Tuple[User, UserResponse]]:
        async with self.uow:
            email = command.email.lower()

            existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            is_first_user = await self.uow.users.count() == 0

            if is_first_user:
                role = Role.ADMIN
            elif command.role is not None and creator_role == Role.ADMIN:
                role = command.role
            elif command.role is not None:
                return Return.err(Error("FORBIDDEN", "Only admins can assign roles"))
            else:
                role = Role.MEMBER

            user = User(
                email=email,
                name=command.name,
                password_hash=hash_password(command.password),
                role=role,
                last_login=utc_now(),
            )
            await self.uow.users.create(user)
            await self.uow.commit()

            return Return.ok((user, UserResponse.from_entity(user)))

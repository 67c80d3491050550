"""
Login Use Case

Verifies credentials and opens a new session.
"""

from typing import Optional

from src.app.services.password_hasher import burn_password_check, verify_password
from src.app.services.token_lifecycle import TokenLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, UserResponse


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password give the same error
    - Disabled users cannot log in
    - Updates user.last_login
    - Creates a new session per login (one per device)
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenLifecycleManager):
        self.uow = uow
        self.tokens = tokens

    async def execute(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            user_agent: Client user agent stored on the session
            ip_address: Client IP stored on the session

        Returns:
            Result with AuthResponse containing tokens, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())

            # Always perform a hash check even if user not found
            if user is None:
                burn_password_check()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not verify_password(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not user.is_active:
                return Return.err(Error("USER_DISABLED", "Account is disabled"))

            user.last_login = utc_now()
            await self.uow.users.update(user)
            await self.uow.commit()

            user_id, user_email, role = user.id, user.email, user.role
            user_response = UserResponse.from_entity(user)

        pair = await self.tokens.issue(user_id, user_email, role, user_agent, ip_address)

        return Return.ok(
            AuthResponse(
                user=user_response,
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
            )
        )

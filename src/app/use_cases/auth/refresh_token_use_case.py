"""
Refresh Token Use Case

Exchanges a refresh token for a new access token and a rotated refresh token.
"""

from typing import Optional
from uuid import UUID

from src.app.services.token_lifecycle import UNAUTHORIZED, TokenLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import RefreshTokenResponse


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token rotation: old token invalidated, new token issued
    - The rotation itself is the authority on token validity (single use)
    - Expired sessions are deleted when presented
    - Owner must still exist and be active, otherwise the session is closed
    - Every failure is reported as UNAUTHORIZED
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenLifecycleManager):
        self.uow = uow
        self.tokens = tokens

    async def execute(
        self,
        refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to rotate
            user_agent: New user agent for the session, None keeps the stored one
            ip_address: New IP for the session, None keeps the stored one

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        rotation = await self.tokens.rotate(refresh_token, user_agent, ip_address)
        if rotation.is_err():
            return rotation

        rotated = rotation.value
        session_id = UUID(rotated.session_id)

        async with self.uow:
            user = await self.uow.users.get_by_id(UUID(rotated.user_id))
            active = user is not None and user.is_active
            if active:
                user_id, email, role = user.id, user.email, user.role

        if not active:
            await self.tokens.logout(session_id)
            return Return.err(UNAUTHORIZED)

        access_token = self.tokens.sign_access(user_id, email, role)

        return Return.ok(
            RefreshTokenResponse(
                access_token=access_token,
                refresh_token=rotated.refresh_token,
                session_id=rotated.session_id,
            )
        )

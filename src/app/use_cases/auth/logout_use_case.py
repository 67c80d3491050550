"""
Logout Use Cases

Single-device and all-devices logout.
"""

from uuid import UUID

from src.app.services.token_lifecycle import TokenLifecycleManager
from src.libs.result import Result, Return


class LogoutUseCase:
    """
    Use case for closing the session behind a refresh token.

    Business Rules:
    - Unknown tokens are ignored (logout is idempotent)
    - A token belonging to another user is ignored
    - Access tokens already issued stay valid until their own expiry
    """

    def __init__(self, tokens: TokenLifecycleManager):
        self.tokens = tokens

    async def execute(self, refresh_token: str, requesting_user_id: UUID) -> Result[dict]:
        session = await self.tokens.store.find_by_token(refresh_token)

        if session is None or session.user_id != requesting_user_id:
            return Return.ok({"revoked": False})

        result = await self.tokens.logout(session.id)
        return Return.ok({"revoked": result.is_ok()})


class LogoutAllUseCase:
    """Use case for logging a user out of every device."""

    def __init__(self, tokens: TokenLifecycleManager):
        self.tokens = tokens

    async def execute(self, user_id: UUID) -> Result[dict]:
        count = await self.tokens.logout_all(user_id)
        return Return.ok({"revoked_count": count})

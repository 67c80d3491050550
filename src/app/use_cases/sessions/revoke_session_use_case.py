"""
Revoke Session Use Case

Closes one session by ID (log out a single device).
"""

from uuid import UUID

from src.app.services.token_lifecycle import TokenLifecycleManager
from src.domain.entities import Role
from src.libs.result import Error, Result, Return


class RevokeSessionUseCase:
    """
    Use case for revoking a specific session.

    Business Rules:
    - Users can revoke their own sessions
    - Admins can revoke any user's session
    - Someone else's session looks exactly like a missing one
    """

    def __init__(self, tokens: TokenLifecycleManager):
        self.tokens = tokens

    async def execute(
        self,
        session_id: UUID,
        requesting_user_id: UUID,
        requesting_role: Role,
    ) -> Result[dict]:
        """
        Execute revoke session use case.

        Args:
            session_id: Session to revoke
            requesting_user_id: User requesting the revocation
            requesting_role: Role of requesting user

        Returns:
            Result with revoked session ID, or Error SESSION_NOT_FOUND
        """
        not_found = Error("SESSION_NOT_FOUND", "Session not found")

        session = await self.tokens.store.get(session_id)
        if session is None:
            return Return.err(not_found)

        if session.user_id != requesting_user_id and requesting_role != Role.ADMIN:
            return Return.err(not_found)

        result = await self.tokens.logout(session_id)
        if result.is_err():
            # Removed concurrently (sweep or another logout)
            return Return.err(not_found)

        return Return.ok({"session_id": str(session_id), "revoked": True})

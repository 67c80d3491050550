"""
Token Lifecycle Manager

Coordinates the claims codec and the session store: issuance, access token
verification, refresh token rotation and logout. Holds no state.

Every authentication failure leaves this module as UNAUTHORIZED; whether a
token was expired, forged or unknown is only written to the log.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.claims_codec import ClaimsCodec
from src.app.services.dtos import RotatedSession, TokenPair
from src.app.services.session_store import SessionStore
from src.domain.claims import AccessClaims, Principal
from src.domain.entities import Role
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

UNAUTHORIZED = Error("UNAUTHORIZED", "Invalid or expired credentials")


class TokenLifecycleManager:
    def __init__(self, codec: ClaimsCodec, store: SessionStore):
        self.codec = codec
        self.store = store

    async def issue(
        self,
        user_id: UUID,
        email: str,
        role: Role,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> TokenPair:
        """
        Issue an access token and open a session for its refresh token.

        The session is persisted before the access token is signed; if
        persistence fails the exception propagates and nothing is issued.
        """
        refresh_token = await self.store.create(user_id, user_agent, ip_address)
        access_token = self.sign_access(user_id, email, role)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def sign_access(self, user_id: UUID, email: str, role: Role) -> str:
        return self.codec.sign(Principal(subject=str(user_id), email=email, role=role))

    def verify_access(self, token: str) -> Result[AccessClaims]:
        """Pure check of an access token; never touches the session store."""
        result = self.codec.verify(token)
        if result.is_err():
            logger.warning(f"Access token rejected: {result.error.code}")
            return Return.err(UNAUTHORIZED)
        return result

    async def rotate(
        self,
        old_refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[RotatedSession]:
        result = await self.store.rotate(old_refresh_token, user_agent, ip_address)
        if result.is_err():
            logger.warning(f"Refresh token rejected: {result.error.code}")
            return Return.err(UNAUTHORIZED)
        return result

    async def logout(self, session_id: UUID) -> Result[None]:
        result = await self.store.revoke(session_id)
        if result.is_err():
            logger.warning(f"Logout rejected for session {session_id}: {result.error.code}")
            return Return.err(UNAUTHORIZED)
        return result

    async def logout_all(self, user_id: UUID) -> int:
        return await self.store.revoke_all(user_id)

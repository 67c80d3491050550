"""
Session Store

Sole writer of session rows. Every operation runs in its own transaction
on the unit of work; rotation is a single conditional update so that a
refresh token can be consumed at most once.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID

from src.app.services.dtos import RotatedSession, SessionInfo
from src.app.services.token_generator import OpaqueTokenGenerator, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Session
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_TTL = timedelta(days=7)


def _normalize(value: Optional[str]) -> Optional[str]:
    # An empty string clears the stored value
    return value or None


class SessionStore:
    """
    Durable session storage.

    Metadata arguments (user_agent, ip_address): None means "not supplied"
    and keeps what is stored; any string overwrites, and "" clears.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_generator: OpaqueTokenGenerator,
        refresh_ttl: timedelta = DEFAULT_REFRESH_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.token_generator = token_generator
        self.refresh_ttl = refresh_ttl
        self.clock = clock

    async def create(
        self,
        user_id: UUID,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> str:
        """
        Open a new session.

        Returns:
            The raw refresh token; only its digest is persisted
        """
        refresh_token = self.token_generator.generate()

        async with self.uow:
            now = self.clock()
            session = Session(
                user_id=user_id,
                refresh_token_hash=hash_token(refresh_token),
                user_agent=_normalize(user_agent),
                ip_address=_normalize(ip_address),
                created_at=now,
                expires_at=now + self.refresh_ttl,
            )
            await self.uow.sessions.create(session)
            await self.uow.commit()

        logger.info(f"Session created for user {user_id}")
        return refresh_token

    async def find_by_token(self, refresh_token: str) -> Optional[Session]:
        async with self.uow:
            session = await self.uow.sessions.get_by_token_hash(hash_token(refresh_token))
            # End the read transaction without expiring the loaded row
            await self.uow.commit()
            return session

    async def get(self, session_id: UUID) -> Optional[Session]:
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            await self.uow.commit()
            return session

    async def rotate(
        self,
        old_refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[RotatedSession]:
        """
        Exchange a live refresh token for a new one.

        Business Rules:
        - Compare-and-swap on the token digest; never read-then-write
        - Concurrent callers with the same token: exactly one succeeds
        - Expired session found under the token is deleted
        - Session id, user and created_at are preserved

        Returns:
            Result with RotatedSession, or Error SESSION_NOT_FOUND / SESSION_EXPIRED
        """
        new_refresh_token = self.token_generator.generate()
        old_hash = hash_token(old_refresh_token)
        new_hash = hash_token(new_refresh_token)

        metadata: Dict[str, Any] = {}
        if user_agent is not None:
            metadata["user_agent"] = _normalize(user_agent)
        if ip_address is not None:
            metadata["ip_address"] = _normalize(ip_address)

        async with self.uow:
            now = self.clock()
            swapped = await self.uow.sessions.swap_token_hash(
                old_hash,
                new_hash,
                now + self.refresh_ttl,
                now,
                metadata,
            )

            if swapped:
                session = await self.uow.sessions.get_by_token_hash(new_hash)
                await self.uow.commit()
                logger.info(f"Refresh token rotated for user {session.user_id}")
                return Return.ok(
                    RotatedSession(
                        refresh_token=new_refresh_token,
                        session_id=str(session.id),
                        user_id=str(session.user_id),
                        expires_at=session.expires_at,
                    )
                )

            # Token no longer matches a live row: either unknown or expired
            stale = await self.uow.sessions.get_by_token_hash(old_hash)
            if stale is None:
                logger.warning("Refresh token rotation failed: token not found")
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            await self.uow.sessions.delete_by_id(stale.id)
            await self.uow.commit()
            logger.warning(
                f"Refresh token rotation failed: session {stale.id} expired"
            )
            return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

    async def revoke(self, session_id: UUID) -> Result[None]:
        async with self.uow:
            deleted = await self.uow.sessions.delete_by_id(session_id)
            if not deleted:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))
            await self.uow.commit()

        logger.info(f"Session {session_id} revoked")
        return Return.ok()

    async def revoke_all(self, user_id: UUID) -> int:
        async with self.uow:
            count = await self.uow.sessions.delete_all_by_user_id(user_id)
            await self.uow.commit()

        logger.info(f"All sessions revoked for user {user_id}: {count} sessions")
        return count

    async def list_active(self, user_id: UUID) -> List[SessionInfo]:
        async with self.uow:
            sessions = await self.uow.sessions.get_active_by_user_id(user_id, self.clock())

            return [
                SessionInfo(
                    id=str(s.id),
                    user_id=str(s.user_id),
                    user_agent=s.user_agent,
                    ip_address=s.ip_address,
                    created_at=s.created_at,
                    expires_at=s.expires_at,
                )
                for s in sessions
            ]

    async def sweep_expired(self) -> int:
        """Delete sessions past expiry. Safe to run concurrently and repeatedly."""
        async with self.uow:
            count = await self.uow.sessions.delete_expired(self.clock())
            await self.uow.commit()

        logger.info(f"Cleaned up {count} expired sessions")
        return count

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = (
            select(Session)
            .where(Session.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by refresh token digest"""
        stmt = (
            select(Session)
            .where(Session.refresh_token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def swap_token_hash(
        self,
        old_token_hash: str,
        new_token_hash: str,
        new_expires_at: datetime,
        now: datetime,
        metadata: Dict[str, Any],
    ) -> bool:
        """
        Compare-and-swap on the refresh_token_hash column.

        The WHERE clause carries both the old digest and the liveness check,
        so two callers racing on the same token cannot both match: the
        database serialises the writes and the loser sees zero rows.
        """
        stmt = (
            update(Session)
            .where(
                Session.refresh_token_hash == old_token_hash,
                Session.expires_at > now,
            )
            .values(
                refresh_token_hash=new_token_hash,
                expires_at=new_expires_at,
                **metadata,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a specific session by ID"""
        stmt = (
            delete(Session)
            .where(Session.id == session_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete every session of a user"""
        stmt = (
            delete(Session)
            .where(Session.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_active_by_user_id(self, user_id: UUID, now: datetime) -> List[Session]:
        """Live sessions of a user, most recently created first"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id, Session.expires_at > now)
            .order_by(Session.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions already past their expiry"""
        stmt = (
            delete(Session)
            .where(Session.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

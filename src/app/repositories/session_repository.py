from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by refresh token digest"""
        pass

    @abstractmethod
    async def swap_token_hash(
        self,
        old_token_hash: str,
        new_token_hash: str,
        new_expires_at: datetime,
        now: datetime,
        metadata: Dict[str, Any],
    ) -> bool:
        """
        Replace the token digest of the live session holding old_token_hash.

        Single conditional write: matches only when the row still carries
        old_token_hash and expires_at > now. Returns True if exactly one row
        changed.
        """
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a session. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions of a user. Returns count removed."""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID, now: datetime) -> List[Session]:
        """Sessions with expires_at > now, newest first"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions with expires_at < now. Returns count removed."""
        pass

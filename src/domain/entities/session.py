"""
Session Entity

Binds a user to the refresh token currently allowed to mint new access tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - one row per signed-in device.

    Business Rules:
    - Only the SHA-256 digest of the refresh token is stored
    - The digest is unique across all sessions
    - Rotation replaces digest and expiry in place (id and user_id never change)
    - A session whose expires_at has passed is dead even before it is swept
    - Expires 7 days after creation or last rotation
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex

    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=45)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)

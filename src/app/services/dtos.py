"""
Token Lifecycle DTOs

Shapes returned by the session store and the token lifecycle manager.
None of them expose stored token material.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TokenPair(BaseModel):
    """Access token plus the refresh token paired with it"""

    access_token: str
    refresh_token: str


class RotatedSession(BaseModel):
    """Outcome of a successful refresh token rotation"""

    refresh_token: str
    session_id: str
    user_id: str
    expires_at: datetime


class SessionInfo(BaseModel):
    """Metadata view of a live session"""

    id: str
    user_id: str
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: datetime
    expires_at: datetime

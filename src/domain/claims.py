"""
Access Token Claims

Closed record signed into every access token. Never persisted.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from src.domain.entities.enums import Role


class Principal(BaseModel):
    """Identity carried by an access token"""

    model_config = ConfigDict(frozen=True)

    subject: str
    email: str
    role: Role


class AccessClaims(Principal):
    """Principal plus the timestamps embedded at signing time"""

    issued_at: datetime
    expires_at: datetime

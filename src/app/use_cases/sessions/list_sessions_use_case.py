"""
List Sessions Use Case

Shows a user the devices they are signed in on.
"""

from typing import List
from uuid import UUID

from src.app.services.dtos import SessionInfo
from src.app.services.session_store import SessionStore
from src.libs.result import Result, Return


class ListSessionsUseCase:
    def __init__(self, store: SessionStore):
        self.store = store

    async def execute(self, user_id: UUID) -> Result[List[SessionInfo]]:
        sessions = await self.store.list_active(user_id)
        return Return.ok(sessions)

"""
Sweep Expired Sessions Use Case

Periodic cleanup of sessions past their expiry (cron / admin trigger).
"""

from src.app.services.session_store import SessionStore
from src.libs.result import Result, Return


class SweepExpiredSessionsUseCase:
    def __init__(self, store: SessionStore):
        self.store = store

    async def execute(self) -> Result[dict]:
        count = await self.store.sweep_expired()
        return Return.ok({"removed_count": count})

"""
Admin API Routes - Maintenance Endpoints

Meant for cron jobs and internal services.
Authentication is via Admin API Key, not user access tokens.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.session_store import SessionStore
from src.app.use_cases.sessions import SweepExpiredSessionsUseCase
from src.depends import get_session_store

router = APIRouter(prefix="/admin", tags=["Admin"])


class SweepSessionsResponse(BaseModel):
    message: str
    removed_count: int


@router.post(
    "/sessions/sweep",
    status_code=status.HTTP_200_OK,
    response_model=SweepSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sweep_expired_sessions(
    store: SessionStore = Depends(get_session_store),
):
    """
    Sweep Expired Sessions

    Deletes every session past its expiry. Idempotent; intended to be
    called periodically.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
    """
    use_case = SweepExpiredSessionsUseCase(store)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    count = result.value["removed_count"]
    return {"message": f"Removed {count} expired session(s)", "removed_count": count}

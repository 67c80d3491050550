from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.dtos import SessionInfo
from src.app.services.session_store import SessionStore
from src.app.services.token_lifecycle import TokenLifecycleManager
from src.app.use_cases.sessions import ListSessionsUseCase, RevokeSessionUseCase
from src.depends import get_current_user, get_session_store, get_token_manager
from src.domain.claims import AccessClaims
from src.libs.result import Error

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class RevokeSpecificSessionResponse(BaseModel):
    """Response for specific session revocation"""

    message: str
    session_id: str
    revoked: bool


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionInfo])
async def list_sessions(
    current_user: AccessClaims = Depends(get_current_user),
    store: SessionStore = Depends(get_session_store),
):
    """
    List Active Sessions

    Returns the caller's unexpired sessions, most recent first.
    """
    use_case = ListSessionsUseCase(store)
    result = await use_case.execute(UUID(current_user.subject))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSpecificSessionResponse,
)
async def revoke_specific_session(
    session_id: str,
    current_user: AccessClaims = Depends(get_current_user),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
):
    """
    Revoke Specific Session

    Logs out a single device. Users can revoke their own sessions, admins
    can revoke any session.

    Raises:
        - 404 Not Found: Session not found (or not visible to the caller)
    """
    try:
        session_uuid = UUID(session_id)
    except ValueError:
        raise ClientError(
            Error("SESSION_NOT_FOUND", "Session not found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    use_case = RevokeSessionUseCase(tokens)
    result = await use_case.execute(
        session_uuid, UUID(current_user.subject), current_user.role
    )

    if result.is_err():
        error = result.error
        if error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    data = result.value
    return {
        "message": "Session revoked successfully",
        "session_id": data["session_id"],
        "revoked": data["revoked"],
    }

from datetime import datetime
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest

from src.app.services.dtos import RotatedSession
from src.app.services.token_lifecycle import UNAUTHORIZED
from src.app.use_cases.auth import RefreshTokenUseCase
from src.domain.entities import Role, User
from src.libs.result import Return


@pytest.fixture
def user():
    return User(email="user@example.com", name="User", password_hash="x", role=Role.MEMBER)


@pytest.fixture
def rotated(user):
    return RotatedSession(
        refresh_token="new-refresh",
        session_id=str(uuid4()),
        user_id=str(user.id),
        expires_at=datetime(2024, 1, 8),
    )


@pytest.fixture
def tokens(mock_tokens, rotated):
    mock_tokens.rotate.return_value = Return.ok(rotated)
    mock_tokens.sign_access = MagicMock(return_value="new-access")
    return mock_tokens


@pytest.mark.asyncio
async def test_refresh_rotates_and_signs(mock_uow, tokens, user, rotated):
    mock_uow.users.get_by_id.return_value = user

    result = await RefreshTokenUseCase(mock_uow, tokens).execute("old-refresh", "ua", "1.2.3.4")

    assert result.is_ok()
    assert result.value.access_token == "new-access"
    assert result.value.refresh_token == "new-refresh"
    assert result.value.session_id == rotated.session_id
    tokens.rotate.assert_awaited_once_with("old-refresh", "ua", "1.2.3.4")
    mock_uow.users.get_by_id.assert_awaited_once_with(user.id)
    tokens.sign_access.assert_called_once_with(user.id, "user@example.com", Role.MEMBER)


@pytest.mark.asyncio
async def test_rejected_rotation_is_returned_unchanged(mock_uow, tokens):
    tokens.rotate.return_value = Return.err(UNAUTHORIZED)

    result = await RefreshTokenUseCase(mock_uow, tokens).execute("reused")

    assert result.error == UNAUTHORIZED
    mock_uow.users.get_by_id.assert_not_awaited()
    tokens.sign_access.assert_not_called()


@pytest.mark.asyncio
async def test_disabled_user_session_is_closed(mock_uow, tokens, user, rotated):
    user.is_active = False
    mock_uow.users.get_by_id.return_value = user

    result = await RefreshTokenUseCase(mock_uow, tokens).execute("old-refresh")

    assert result.error == UNAUTHORIZED
    tokens.logout.assert_awaited_once_with(UUID(rotated.session_id))
    tokens.sign_access.assert_not_called()


@pytest.mark.asyncio
async def test_deleted_user_session_is_closed(mock_uow, tokens, rotated):
    mock_uow.users.get_by_id.return_value = None

    result = await RefreshTokenUseCase(mock_uow, tokens).execute("old-refresh")

    assert result.error == UNAUTHORIZED
    tokens.logout.assert_awaited_once_with(UUID(rotated.session_id))

from datetime import datetime
from uuid import uuid4

import pytest

from src.app.use_cases.auth import LogoutAllUseCase, LogoutUseCase
from src.domain.entities import Session
from src.libs.result import Return


def _session(user_id):
    return Session(
        user_id=user_id,
        refresh_token_hash="a" * 64,
        expires_at=datetime(2024, 1, 8),
    )


@pytest.mark.asyncio
async def test_logout_revokes_own_session(mock_tokens):
    user_id = uuid4()
    session = _session(user_id)
    mock_tokens.store.find_by_token.return_value = session
    mock_tokens.logout.return_value = Return.ok()

    result = await LogoutUseCase(mock_tokens).execute("refresh", user_id)

    assert result.value == {"revoked": True}
    mock_tokens.logout.assert_awaited_once_with(session.id)


@pytest.mark.asyncio
async def test_logout_unknown_token_is_silent(mock_tokens):
    mock_tokens.store.find_by_token.return_value = None

    result = await LogoutUseCase(mock_tokens).execute("unknown", uuid4())

    assert result.is_ok()
    assert result.value == {"revoked": False}
    mock_tokens.logout.assert_not_awaited()


@pytest.mark.asyncio
async def test_logout_ignores_other_users_token(mock_tokens):
    mock_tokens.store.find_by_token.return_value = _session(uuid4())

    result = await LogoutUseCase(mock_tokens).execute("someone-elses", uuid4())

    assert result.value == {"revoked": False}
    mock_tokens.logout.assert_not_awaited()


@pytest.mark.asyncio
async def test_logout_all_reports_count(mock_tokens):
    user_id = uuid4()
    mock_tokens.logout_all.return_value = 4

    result = await LogoutAllUseCase(mock_tokens).execute(user_id)

    assert result.value == {"revoked_count": 4}
    mock_tokens.logout_all.assert_awaited_once_with(user_id)

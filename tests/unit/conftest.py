import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with the user and session repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.count = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.get_by_id = AsyncMock()
    uow.sessions.get_by_token_hash = AsyncMock()
    uow.sessions.swap_token_hash = AsyncMock()
    uow.sessions.delete_by_id = AsyncMock()
    uow.sessions.delete_all_by_user_id = AsyncMock()
    uow.sessions.get_active_by_user_id = AsyncMock()
    uow.sessions.delete_expired = AsyncMock()
    return uow


@pytest.fixture
def mock_tokens():
    """Mock TokenLifecycleManager"""
    tokens = MagicMock()
    tokens.issue = AsyncMock()
    tokens.rotate = AsyncMock()
    tokens.logout = AsyncMock()
    tokens.logout_all = AsyncMock()
    tokens.store = MagicMock()
    tokens.store.find_by_token = AsyncMock()
    tokens.store.get = AsyncMock()
    return tokens

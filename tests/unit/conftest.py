import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with users and password_reset_tokens repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_identity = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.update = AsyncMock()

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock()
    uow.password_reset_tokens.invalidate_live_for_user = AsyncMock(return_value=0)
    uow.password_reset_tokens.get_live = AsyncMock()
    uow.password_reset_tokens.mark_used = AsyncMock()

    return uow


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.send_password_reset = AsyncMock(return_value=True)
    return notifier

"""
Unit tests for ValidateSessionUseCase
"""
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.auth.validate_session_use_case import ValidateSessionUseCase
from src.domain.entities import User


def make_claims(user_id, issued_at: datetime) -> dict:
    return {
        "user_id": str(user_id),
        "username": "fleetadmin",
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(hours=24)).timestamp()),
    }


def make_user(user_id, password_changed_at=None) -> User:
    return User(
        id=user_id,
        username="fleetadmin",
        email="admin@fleet.example",
        phone="0912345678",
        password="hashed_password",
        password_changed_at=password_changed_at,
    )


@pytest.mark.asyncio
async def test_valid_session(mock_uow):
    user_id = uuid4()
    issued_at = datetime.now(UTC)
    mock_uow.users.get_by_id.return_value = make_user(user_id)

    result = await ValidateSessionUseCase(mock_uow).execute(make_claims(user_id, issued_at))

    assert result.is_ok()
    assert result.value.username == "fleetadmin"
    assert int(result.value.expires_at.timestamp()) == int(
        (issued_at + timedelta(hours=24)).timestamp()
    )


@pytest.mark.asyncio
async def test_unknown_user(mock_uow):
    mock_uow.users.get_by_id.return_value = None

    result = await ValidateSessionUseCase(mock_uow).execute(
        make_claims(uuid4(), datetime.now(UTC))
    )

    assert result.is_err()
    assert result.error.code == "SESSION_INVALID"


@pytest.mark.asyncio
async def test_session_issued_before_password_reset_rejected(mock_uow):
    user_id = uuid4()
    issued_at = datetime.now(UTC) - timedelta(hours=2)
    changed_at = datetime.utcnow() - timedelta(hours=1)
    mock_uow.users.get_by_id.return_value = make_user(user_id, password_changed_at=changed_at)

    result = await ValidateSessionUseCase(mock_uow).execute(make_claims(user_id, issued_at))

    assert result.is_err()
    assert result.error.code == "SESSION_INVALID"


@pytest.mark.asyncio
async def test_session_issued_after_password_reset_accepted(mock_uow):
    user_id = uuid4()
    changed_at = datetime.utcnow() - timedelta(hours=2)
    issued_at = datetime.now(UTC) - timedelta(hours=1)
    mock_uow.users.get_by_id.return_value = make_user(user_id, password_changed_at=changed_at)

    result = await ValidateSessionUseCase(mock_uow).execute(make_claims(user_id, issued_at))

    assert result.is_ok()


@pytest.mark.asyncio
async def test_malformed_claims(mock_uow):
    result = await ValidateSessionUseCase(mock_uow).execute({"user_id": "nope"})

    assert result.is_err()
    assert result.error.code == "SESSION_INVALID"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [12345, None, ["id"]])
async def test_non_string_user_id_claim(mock_uow, user_id):
    now = int(datetime.now(UTC).timestamp())

    result = await ValidateSessionUseCase(mock_uow).execute(
        {"user_id": user_id, "iat": now, "exp": now + 3600}
    )

    assert result.is_err()
    assert result.error.code == "SESSION_INVALID"
    mock_uow.users.get_by_id.assert_not_called()

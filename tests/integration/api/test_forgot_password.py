"""
Integration tests for POST /api/forgot-password

Covers token issuance, single live token per user, no account enumeration,
delivery failure and rate limiting.
"""
import hashlib
from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import PasswordResetToken


def identity(user: dict) -> dict:
    return {"username": user["username"], "email": user["email"], "phone": user["phone"]}


async def fetch_tokens(db_session: AsyncSession, user_id) -> list:
    db_session.expire_all()
    stmt = select(PasswordResetToken).where(PasswordResetToken.user_id == user_id)
    result = await db_session.exec(stmt)
    return result.all()


@pytest.mark.asyncio
async def test_successful_password_reset_request(
    client: AsyncClient, db_session: AsyncSession, admin_user, notifier
):
    """
    Given I have an account
    When I request a password reset with matching username, email and phone
    Then a token valid for 24 hours is stored as a SHA-256 hash
    And the reset link is delivered to my registered email only
    """
    response = await client.post("/api/forgot-password", json=identity(admin_user))

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"]

    # Token is delivered out of band, never in the response
    assert len(notifier.sent) == 1
    to_email, plain_token = notifier.sent[0]
    assert to_email == admin_user["email"]
    assert plain_token not in response.text

    tokens = await fetch_tokens(db_session, admin_user["id"])
    assert len(tokens) == 1
    token = tokens[0]
    assert token.token_hash == hashlib.sha256(plain_token.encode()).hexdigest()
    assert token.is_used is False
    assert token.ip_address == "127.0.0.1"

    time_until_expiry = token.expires_at - datetime.utcnow()
    assert time_until_expiry > timedelta(hours=23, minutes=55)
    assert time_until_expiry <= timedelta(hours=24)


@pytest.mark.asyncio
async def test_repeated_requests_leave_single_live_token(
    client: AsyncClient, db_session: AsyncSession, admin_user, notifier
):
    for _ in range(3):
        response = await client.post("/api/forgot-password", json=identity(admin_user))
        assert response.status_code == 200

    now = datetime.utcnow()
    live = [
        t for t in await fetch_tokens(db_session, admin_user["id"])
        if not t.is_used and t.expires_at > now
    ]
    assert len(live) == 1
    assert live[0].token_hash == hashlib.sha256(notifier.last_token.encode()).hexdigest()

    # Superseded tokens no longer verify
    for _email, superseded in notifier.sent[:-1]:
        response = await client.get(
            "/api/reset-password/verify-token", params={"token": superseded}
        )
        assert response.status_code == 400


@pytest.mark.asyncio
async def test_used_tokens_survive_new_issuance(
    client: AsyncClient, db_session: AsyncSession, admin_user, notifier
):
    """Only live tokens are removed; used ones stay as history"""
    await client.post("/api/forgot-password", json=identity(admin_user))
    await client.post("/api/reset-password/update", json={
        "token": notifier.last_token,
        "userId": str(admin_user["id"]),
        "newPassword": "NewPass123",
        "confirmPassword": "NewPass123",
    })

    response = await client.post("/api/forgot-password", json=identity(admin_user))
    assert response.status_code == 200

    tokens = await fetch_tokens(db_session, admin_user["id"])
    assert len(tokens) == 2
    assert sorted(t.is_used for t in tokens) == [False, True]


@pytest.mark.asyncio
async def test_no_enumeration_between_mismatch_and_unknown_user(
    client: AsyncClient, admin_user, notifier
):
    """
    A known username with the wrong email answers exactly like an unknown
    username.
    """
    mismatched = {**identity(admin_user), "email": "someone@else.example"}
    unknown = {"username": "ghost", "email": "ghost@fleet.example", "phone": "0000000000"}

    response_mismatch = await client.post("/api/forgot-password", json=mismatched)
    response_unknown = await client.post("/api/forgot-password", json=unknown)

    assert response_mismatch.status_code == response_unknown.status_code == 400
    assert response_mismatch.json() == response_unknown.json()
    assert response_mismatch.json()["code"] == "ACCOUNT_MISMATCH"
    assert notifier.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["username", "email", "phone"])
async def test_missing_field_rejected(client: AsyncClient, admin_user, missing):
    payload = identity(admin_user)
    payload[missing] = ""

    response = await client.post("/api/forgot-password", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_non_json_body_rejected_with_envelope(client: AsyncClient):
    response = await client.post(
        "/api/forgot-password",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_delivery_failure_returns_500_and_next_request_recovers(
    client: AsyncClient, db_session: AsyncSession, admin_user, notifier
):
    notifier.succeed = False

    response = await client.post("/api/forgot-password", json=identity(admin_user))

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "DELIVERY_FAILED"

    # The token row exists even though the email failed
    assert len(await fetch_tokens(db_session, admin_user["id"])) == 1

    notifier.succeed = True
    response = await client.post("/api/forgot-password", json=identity(admin_user))
    assert response.status_code == 200

    tokens = await fetch_tokens(db_session, admin_user["id"])
    assert len(tokens) == 1
    assert tokens[0].token_hash == hashlib.sha256(notifier.last_token.encode()).hexdigest()


@pytest.mark.asyncio
async def test_sixth_request_in_window_is_rate_limited(
    client: AsyncClient, admin_user, notifier
):
    for _ in range(5):
        response = await client.post("/api/forgot-password", json=identity(admin_user))
        assert response.status_code == 200

    response = await client.post("/api/forgot-password", json=identity(admin_user))

    assert response.status_code == 429
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "RATE_LIMITED"
    assert len(notifier.sent) == 5


@pytest.mark.asyncio
async def test_rate_limit_counts_failed_requests_and_resets_after_window(
    client: AsyncClient, admin_user, rate_limiter
):
    now = [1000.0]
    rate_limiter.store.clock = lambda: now[0]
    unknown = {"username": "ghost", "email": "ghost@fleet.example", "phone": "0000000000"}

    for _ in range(5):
        response = await client.post("/api/forgot-password", json=unknown)
        assert response.status_code == 400

    response = await client.post("/api/forgot-password", json=identity(admin_user))
    assert response.status_code == 429

    now[0] += 3600
    response = await client.post("/api/forgot-password", json=identity(admin_user))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_other_endpoints_are_not_rate_limited(client: AsyncClient):
    for _ in range(10):
        response = await client.get(
            "/api/reset-password/verify-token", params={"token": "nope"}
        )
        assert response.status_code == 400

"""
Core utilities: conflict retry, tokens, logging setup and health.
"""

import logging
from datetime import timedelta

import pytest

from waybill.app.core.exceptions import ConflictError, ResourceNotFoundError
from waybill.app.core.jwt import create_access_token, decode_access_token, owner_id_from_claims
from waybill.app.core.logging_config import configure_logging, resolve_level
from waybill.app.core.reliability import retry_on_conflict


class Flaky:
    def __init__(self, failures, error=None):
        self.failures = failures
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error or ConflictError("Trip", "t1", expected_version=self.calls)
        return "done"


@pytest.mark.asyncio
async def test_retry_recovers_from_transient_conflicts():
    operation = Flaky(failures=2)
    assert await retry_on_conflict(operation, attempts=3) == "done"
    assert operation.calls == 3


@pytest.mark.asyncio
async def test_retry_gives_up_after_attempts():
    operation = Flaky(failures=10)
    with pytest.raises(ConflictError):
        await retry_on_conflict(operation, attempts=3)
    assert operation.calls == 3


@pytest.mark.asyncio
async def test_retry_with_zero_attempts_still_calls_once():
    operation = Flaky(failures=0)
    assert await retry_on_conflict(operation, attempts=0) == "done"
    assert operation.calls == 1


@pytest.mark.asyncio
async def test_retry_does_not_swallow_other_errors():
    operation = Flaky(failures=1, error=ResourceNotFoundError("Trip", "t1"))
    with pytest.raises(ResourceNotFoundError):
        await retry_on_conflict(operation, attempts=3)
    assert operation.calls == 1


def test_token_round_trip_and_tampering():
    token = create_access_token({"sub": "ops", "user_id": 42})

    payload = decode_access_token(token)
    assert payload["user_id"] == 42
    assert "exp" in payload

    header, body, _ = token.split(".")
    other_signature = create_access_token({"sub": "ops", "user_id": 43}).split(".")[2]
    assert decode_access_token(f"{header}.{body}.{other_signature}") is None


def test_expired_token_is_rejected():
    token = create_access_token({"user_id": "owner-a"}, expires_delta=timedelta(seconds=-5))
    assert decode_access_token(token) is None


@pytest.mark.parametrize("claims, expected", [
    ({"user_id": "owner-a"}, "owner-a"),
    ({"user_id": 42}, "42"),
    ({"user_id": "  "}, None),
    ({"user_id": True}, None),
    ({"user_id": "o" * 65}, None),
    ({"sub": "ops"}, None),
])
def test_owner_id_from_claims(claims, expected):
    assert owner_id_from_claims(claims) == expected


def test_logging_levels():
    assert resolve_level("DEBUG") == logging.DEBUG
    assert resolve_level("warn") == logging.WARNING
    assert resolve_level("verbose") == logging.INFO


def test_configure_logging_installs_one_handler():
    root = logging.getLogger()
    original_level = root.level
    try:
        configure_logging("error")
        configure_logging("debug")
        ours = [h for h in root.handlers if getattr(h, "_waybill", False)]
        assert len(ours) == 1
        assert root.level == logging.DEBUG
    finally:
        for handler in [h for h in root.handlers if getattr(h, "_waybill", False)]:
            root.removeHandler(handler)
        root.setLevel(original_level)


@pytest.mark.asyncio
async def test_health_reports_redis(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["redis"] == "up"


@pytest.mark.asyncio
async def test_health_reports_redis_down(client, mocker, redis_client_session):
    mocker.patch.object(redis_client_session, "ping", side_effect=ConnectionError("refused"))
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["redis"] == "down"

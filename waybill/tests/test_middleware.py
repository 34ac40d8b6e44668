"""
API key gate, rate limiting and observability headers.

The gates are mounted on small throwaway apps so each test controls its
own configuration.
"""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from waybill.app.core.middleware import ApiKeyMiddleware, RateLimitMiddleware
from waybill.app.core.observability import ObservabilityMiddleware


def build_app(*middleware) -> FastAPI:
    app = FastAPI()

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/v1/ping")
    async def ping():
        return {"pong": True}

    for cls, kwargs in middleware:
        app.add_middleware(cls, **kwargs)
    return app


async def call(app, path, headers=None):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.get(path, headers=headers or {})


@pytest.mark.asyncio
async def test_api_key_gate():
    app = build_app((ApiKeyMiddleware, {"api_key": "s3cret"}))

    missing = await call(app, "/v1/ping")
    assert missing.status_code == 401
    assert missing.json()["error_code"] == "ERR_AUTH_001"

    wrong = await call(app, "/v1/ping", {"X-API-Key": "nope"})
    assert wrong.status_code == 401

    ok = await call(app, "/v1/ping", {"X-API-Key": "s3cret"})
    assert ok.status_code == 200

    exempt = await call(app, "/health")
    assert exempt.status_code == 200


@pytest.mark.asyncio
async def test_rate_limit_window(redis_client_session):
    app = build_app((RateLimitMiddleware, {"requests": 3, "window_seconds": 60}))

    statuses = [(await call(app, "/v1/ping")).status_code for _ in range(4)]
    assert statuses == [200, 200, 200, 429]

    blocked = await call(app, "/v1/ping")
    assert blocked.headers["Retry-After"] == "60"
    assert blocked.json()["error_code"] == "ERR_RATE_LIMIT_001"

    assert (await call(app, "/health")).status_code == 200


@pytest.mark.asyncio
async def test_rate_limit_headers_and_expiry(redis_client_session):
    app = build_app((RateLimitMiddleware, {"requests": 5, "window_seconds": 30, "key_prefix": "rl-test"}))

    response = await call(app, "/v1/ping")

    assert response.headers["X-RateLimit-Limit"] == "5"
    assert response.headers["X-RateLimit-Remaining"] == "4"
    keys = [k for k in redis_client_session.store if k.startswith("rl-test:")]
    assert len(keys) == 1
    assert keys[0] in redis_client_session.expiry


@pytest.mark.asyncio
async def test_rate_limit_fails_open_when_redis_is_down(mocker, redis_client_session):
    mocker.patch.object(redis_client_session, "incr", side_effect=ConnectionError("down"))
    app = build_app((RateLimitMiddleware, {"requests": 1, "window_seconds": 60}))

    statuses = [(await call(app, "/v1/ping")).status_code for _ in range(3)]
    assert statuses == [200, 200, 200]


@pytest.mark.asyncio
async def test_main_app_sets_correlation_headers(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "abc-123"
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_error_body_carries_correlation_id(client, owner_headers):
    headers = {**owner_headers, "X-Correlation-ID": "trace-9"}
    response = await client.get("/v1/trucks/missing", headers=headers)

    assert response.status_code == 404
    assert response.json()["error_code"] == "ERR_NOT_FOUND_001"
    assert response.json()["correlation_id"] == "trace-9"


@pytest.mark.asyncio
async def test_gate_rejections_carry_correlation_id(redis_client_session):
    app = build_app(
        (ApiKeyMiddleware, {"api_key": "s3cret"}),
        (RateLimitMiddleware, {"requests": 2, "window_seconds": 60, "key_prefix": "rl-trace"}),
        (ObservabilityMiddleware, {}),
    )

    rejected = await call(app, "/v1/ping", {"X-Correlation-ID": "gate-1"})
    assert rejected.status_code == 401
    assert rejected.json()["correlation_id"] == "gate-1"
    assert rejected.headers["WWW-Authenticate"] == "Bearer"

    headers = {"X-API-Key": "s3cret", "X-Correlation-ID": "gate-2"}
    assert (await call(app, "/v1/ping", headers)).status_code == 200
    limited = await call(app, "/v1/ping", headers)
    assert limited.status_code == 429
    assert limited.json()["correlation_id"] == "gate-2"
    assert limited.headers["Retry-After"] == "60"

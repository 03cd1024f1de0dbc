# ============================================================================
# APPLICATION BOOTSTRAP TESTS
# ============================================================================
# STATUS: Tests - App factory, CORS and lifespan wiring
# PURPOSE: Verify startup validation and middleware without live services
# ============================================================================
"""
Application Bootstrap Tests

Tests main.py. The process environment is swapped for a private dict and
the database/Redis constructors are replaced, so no services are needed.

Run with:
    pytest tests/test_main.py -v
"""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

import main
from __version__ import SERVICE_NAME
from core.config import AppDefaults, EnvironmentValidationError, reset_defaults
from core.config.validation import ENV_RULES

FRONTEND = "https://chat.example.com"


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def env(monkeypatch):
    """Private environment holding only a valid DATABASE_URL among app keys."""
    app_keys = {rule.key for rule in ENV_RULES} | {"LOG_FORMAT", "HOST"}
    environ = {k: v for k, v in os.environ.items() if k not in app_keys}
    environ["DATABASE_URL"] = "postgresql://app@db:5432/webchat"

    monkeypatch.setattr(os, "environ", environ)
    monkeypatch.setattr(main, "configure_logging", MagicMock())
    reset_defaults()
    yield environ
    reset_defaults()


class MemoryStore:
    """Dict-backed KeyValueStore with a close() like RedisStore."""

    def __init__(self):
        self.data = {}
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ttl_seconds):
        self.data[key] = value

    async def delete(self, key):
        self.data.pop(key, None)

    async def clear(self):
        self.data.clear()

    async def close(self):
        self.closed = True


# ============================================================================
# STARTUP VALIDATION
# ============================================================================

class TestCreateAppValidation:
    """create_app() without settings validates the environment first."""

    def test_non_numeric_port_raises_validation_error(self, env):
        env["PORT"] = "abc"

        with pytest.raises(EnvironmentValidationError) as exc_info:
            main.create_app()

        assert "PORT must be a whole number, got: abc" in exc_info.value.errors

    def test_fractional_cache_ttl_raises_validation_error(self, env):
        env["CACHE_TTL"] = "1.5"

        with pytest.raises(EnvironmentValidationError) as exc_info:
            main.create_app()

        assert "CACHE_TTL must be a whole number, got: 1.5" in exc_info.value.errors

    def test_missing_database_url(self, env):
        del env["DATABASE_URL"]

        with pytest.raises(EnvironmentValidationError):
            main.create_app()

    def test_valid_env_builds_app_with_defaults_written_back(self, env):
        env["FRONTEND_URL"] = FRONTEND

        app = main.create_app()

        assert env["PORT"] == "3000"
        resp = TestClient(app).get("/", headers={"Origin": FRONTEND})
        assert resp.headers["access-control-allow-origin"] == FRONTEND


# ============================================================================
# CORS AND HEADERS
# ============================================================================

class TestCors:
    """CORS is restricted to FRONTEND_URL with credentials allowed."""

    def _client(self, **overrides):
        return TestClient(main.create_app(AppDefaults(frontend_url=FRONTEND, **overrides)))

    def test_root_info(self):
        resp = self._client().get("/")

        assert resp.status_code == 200
        assert resp.json()["service"] == SERVICE_NAME

    def test_frontend_origin_allowed_with_credentials(self):
        resp = self._client().get("/", headers={"Origin": FRONTEND})

        assert resp.headers["access-control-allow-origin"] == FRONTEND
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_preflight_from_frontend(self):
        resp = self._client().options(
            "/health",
            headers={"Origin": FRONTEND, "Access-Control-Request-Method": "GET"},
        )

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == FRONTEND

    def test_other_origin_not_allowed(self):
        resp = self._client().get("/", headers={"Origin": "https://evil.example.com"})

        assert "access-control-allow-origin" not in resp.headers

    def test_hsts_only_in_production(self):
        assert "strict-transport-security" not in self._client().get("/").headers

        resp = self._client(environment="production").get("/")

        assert "max-age" in resp.headers["strict-transport-security"]


# ============================================================================
# LIFESPAN
# ============================================================================

class TestLifespan:
    """Startup wires the health checks; shutdown closes connections."""

    def test_startup_and_shutdown(self, env, monkeypatch):
        database = MagicMock()
        database.name = "webchat"
        database.ready_state = 1
        database.ping = AsyncMock()
        init_database = AsyncMock(return_value=database)
        close_database = AsyncMock()
        store = MemoryStore()
        redis_store = MagicMock()
        redis_store.from_config.return_value = store

        monkeypatch.setattr(main, "init_database", init_database)
        monkeypatch.setattr(main, "close_database", close_database)
        monkeypatch.setattr(main, "RedisStore", redis_store)

        app = main.create_app(AppDefaults(frontend_url=FRONTEND))

        with TestClient(app) as client:
            resp = client.get("/health")

            assert resp.status_code == 200
            assert set(resp.json()["services"]) == {"database", "cache"}
            assert app.state.cache is not None

        init_database.assert_awaited_once()
        assert init_database.await_args.args[0].url == env["DATABASE_URL"]
        close_database.assert_awaited_once()
        assert store.closed is True
        assert TestClient(app).get("/health").status_code == 500

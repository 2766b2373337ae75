"""
PlantPlan Backend - Configuration and Application Wiring Tests
==============================================================

What:  Settings validation, log-level selection in the access logger, and
       the error paths of the app that the CRUD tests do not reach.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient, ASGITransport
from pydantic import ValidationError as SettingsValidationError

from app.config import Settings
from app.exceptions import DatabaseError, PlantPlanError
from app.main import create_app
from app.middleware.logging import level_for_status
from app.services.plan_store import PlanStore


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None, plan_store_backend="memory")

        assert settings.uses_database is False
        assert settings.log_level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    def test_backend_name_normalized(self):
        assert Settings(_env_file=None, plan_store_backend=" Database ").plan_store_backend == "database"

    def test_unknown_backend_rejected(self):
        with pytest.raises(SettingsValidationError):
            Settings(_env_file=None, plan_store_backend="mongo")

    def test_log_level_upper_cased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(SettingsValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_cors_origins_split(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_database_backend_requires_url(self):
        settings = Settings(_env_file=None, plan_store_backend="database", database_url=" ")

        with pytest.raises(ValueError, match="DATABASE_URL"):
            settings.validate_required_for_production()


class TestAccessLogLevels:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (204, logging.INFO), (404, logging.WARNING), (503, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level


def _failing_store(error: Exception) -> MagicMock:
    store = MagicMock(spec=PlanStore)
    store.backend_name = "memory"
    store.get_all = AsyncMock(side_effect=error)
    store.count_all = AsyncMock(side_effect=error)
    return store


class TestErrorResponses:

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_generic_500(self):
        app = create_app(store=_failing_store(RuntimeError("secret internals")))
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/plans")

        assert response.status_code == 500
        assert "secret internals" not in response.text
        assert response.json()["error"] == "internal_server_error"

    @pytest.mark.asyncio
    async def test_database_error_returns_generic_500(self):
        error = DatabaseError(
            message="Could not complete the plant plan operation.",
            context={"operation": "get_all", "error_type": "OperationalError"},
        )
        app = create_app(store=_failing_store(error))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/plans")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "An internal error occurred. Please try again later."
        assert "details" not in body
        assert "OperationalError" not in response.text
        assert "get_all" not in response.text

    @pytest.mark.asyncio
    async def test_application_error_returns_500_without_context(self):
        error = PlantPlanError(message="Plan store unavailable", context={"dsn": "secret-host"})
        app = create_app(store=_failing_store(error))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/plans")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert response.json()["message"] == "Plan store unavailable"
        assert "secret-host" not in response.text

    @pytest.mark.asyncio
    async def test_not_found_details_carry_only_resource_id(self, test_client):
        response = await test_client.get("/api/plans/missing-id")

        assert response.status_code == 404
        assert response.json()["details"] == {"resource_id": "missing-id"}

    @pytest.mark.asyncio
    async def test_health_reports_unavailable_store(self):
        app = create_app(store=_failing_store(RuntimeError("down")))
        transport = ASGITransport(app=app)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["store"] == "unavailable"
        assert response.json()["plan_count"] is None

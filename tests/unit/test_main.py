"""Unit tests for main application module."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from dashboard.core.config import AppConfig, AppEnvironment, Settings
from dashboard.main import create_app, lifespan, run, setup_telemetry
from dashboard.persistence.filter_store import InMemoryFilterStore, JsonFileFilterStore


def make_settings(env: AppEnvironment = AppEnvironment.LOCAL, **sections) -> Settings:
    return Settings(app=AppConfig(env=env), **sections)


class TestCreateApp:
    """Test create_app function."""

    def test_create_app_returns_fastapi(self):
        """Test that create_app returns a FastAPI instance."""
        with patch("dashboard.main.get_settings", return_value=make_settings()):
            app = create_app()

        assert isinstance(app, FastAPI)
        assert app.title == "Transaction Dashboard API"

    def test_create_app_includes_routers(self):
        """Test every route group is mounted under the API prefix."""
        with patch("dashboard.main.get_settings", return_value=make_settings()):
            app = create_app()

        paths = {getattr(route, "path", "") for route in app.routes}
        for expected in (
            "/api/v1/health",
            "/api/v1/dashboard",
            "/api/v1/transactions",
            "/api/v1/transactions/stats",
            "/api/v1/transactions/daily",
            "/api/v1/transactions/{code}",
            "/api/v1/transactions/{code}/history",
            "/api/v1/fraud",
            "/api/v1/filters/date-range",
        ):
            assert expected in paths

    def test_create_app_exception_handlers(self):
        """Test domain and global exception handlers are registered."""
        with patch("dashboard.main.get_settings", return_value=make_settings()):
            app = create_app()

        assert Exception in app.exception_handlers
        assert len(app.exception_handlers) >= 2

    def test_create_app_docs_disabled_in_production(self):
        """Test that docs are disabled in production."""
        with patch("dashboard.main.get_settings", return_value=make_settings(AppEnvironment.PROD)):
            app = create_app()

        assert app.docs_url is None
        assert app.redoc_url is None
        assert app.openapi_url is None


class TestLifespan:
    """Test lifespan context manager."""

    @pytest.mark.asyncio
    async def test_lifespan_startup_and_shutdown(self):
        """Test startup wires the client and store, shutdown closes the client."""
        settings = make_settings()
        mock_client = MagicMock()
        mock_client.aclose = AsyncMock()

        with patch("dashboard.main.get_settings", return_value=settings):
            with patch("dashboard.main.TransactionBackendClient", return_value=mock_client):
                with patch("dashboard.main.setup_logging"):
                    app = FastAPI()
                    async with lifespan(app):
                        assert app.state.settings is settings
                        assert app.state.backend_client is mock_client
                        assert isinstance(app.state.filter_store, InMemoryFilterStore)

        mock_client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lifespan_file_filter_store(self, tmp_path):
        """Test a configured filter path selects the JSON file store."""
        from dashboard.core.config import FilterStoreConfig

        settings = make_settings(filters=FilterStoreConfig(path=str(tmp_path / "filter.json")))

        with patch("dashboard.main.get_settings", return_value=settings):
            with patch("dashboard.main.setup_logging"):
                app = FastAPI()
                async with lifespan(app):
                    assert isinstance(app.state.filter_store, JsonFileFilterStore)


class TestSetupTelemetry:
    """Test setup_telemetry function."""

    def test_setup_telemetry_returns_early_without_endpoint(self):
        """Test setup_telemetry returns early if no OTLP endpoint."""
        mock_settings = MagicMock()
        mock_settings.observability.otlp_endpoint = None

        with patch("dashboard.main.FastAPIInstrumentor") as instrumentor:
            setup_telemetry(FastAPI(), mock_settings)

        instrumentor.instrument_app.assert_not_called()

    def test_setup_telemetry_with_endpoint(self):
        """Test setup_telemetry sets up telemetry when endpoint provided."""
        mock_settings = MagicMock()
        mock_settings.observability.otlp_endpoint = "http://localhost:4317"
        mock_settings.observability.service_name = "test-service"

        with patch("dashboard.main.OTLPSpanExporter"):
            with patch("dashboard.main.TracerProvider"):
                with patch("dashboard.main.BatchSpanProcessor"):
                    with patch("dashboard.main.trace"):
                        with patch("dashboard.main.FastAPIInstrumentor") as instrumentor:
                            app = FastAPI()
                            setup_telemetry(app, mock_settings)

        instrumentor.instrument_app.assert_called_once_with(app)


class TestRun:
    """Test run function."""

    def test_run_starts_uvicorn_factory(self):
        """Test run hands the app factory to uvicorn."""
        with patch("dashboard.main.get_settings", return_value=make_settings(AppEnvironment.PROD)):
            with patch("uvicorn.run") as mock_run:
                run()

        args, kwargs = mock_run.call_args
        assert args[0] == "dashboard.main:create_app"
        assert kwargs["factory"] is True
        assert kwargs["reload"] is False
        assert kwargs["log_level"] == "info"

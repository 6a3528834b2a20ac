"""Fixtures for API tests running the full app against a mocked backend."""

import httpx
import pytest

from dashboard.core.dependencies import get_settings_dep
from dashboard.main import create_app
from dashboard.persistence.filter_store import InMemoryFilterStore
from tests.utils.backend_payloads import route_backend


@pytest.fixture
def filter_store() -> InMemoryFilterStore:
    return InMemoryFilterStore()


@pytest.fixture
async def make_api_client(settings, make_backend_client, filter_store):
    """Factory for an HTTP client whose backend answers from ``routes``.

    ``ASGITransport`` does not run the lifespan, so app state is wired here.
    """
    clients: list[httpx.AsyncClient] = []

    def factory(routes: dict) -> httpx.AsyncClient:
        app = create_app()
        app.state.settings = settings
        app.state.backend_client = make_backend_client(route_backend(routes))
        app.state.filter_store = filter_store
        app.dependency_overrides[get_settings_dep] = lambda: settings

        client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()

"""Pytest configuration and fixtures."""

from __future__ import annotations

import copy
import os
import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Set test environment variables before importing the app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("OTEL_LOG_RECORD_FORMAT", "console")

from dashboard.clients.backend_client import TransactionBackendClient  # noqa: E402
from dashboard.core.config import BackendConfig, Settings  # noqa: E402
from tests.utils.backend_payloads import (  # noqa: E402
    HISTORY_URL,
    RAW_HISTORY,
    RAW_PRIMARY_RECORD,
    RAW_RANGE_RECORDS,
    TRANSACTIONS_URL,
    Handler,
)


@pytest.fixture
def raw_range_records() -> list[dict]:
    return copy.deepcopy(RAW_RANGE_RECORDS)


@pytest.fixture
def raw_primary_record() -> dict:
    return copy.deepcopy(RAW_PRIMARY_RECORD)


@pytest.fixture
def raw_history() -> list[dict]:
    return copy.deepcopy(RAW_HISTORY)


@pytest.fixture
def backend_config() -> BackendConfig:
    return BackendConfig(
        transactions_base_url=TRANSACTIONS_URL,
        history_base_url=HISTORY_URL,
        timeout_seconds=2.0,
    )


@pytest.fixture
def settings(backend_config: BackendConfig) -> Settings:
    return Settings(backend=backend_config)


@pytest.fixture
def make_backend_client(backend_config: BackendConfig):
    """Factory for a backend client whose HTTP traffic goes to ``handler``."""

    def factory(handler: Handler) -> TransactionBackendClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return TransactionBackendClient(backend_config, client=client)

    return factory

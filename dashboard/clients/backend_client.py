"""HTTP client for the transaction-processing microservice.

Wraps the four read endpoints the dashboard consumes. Transport problems
are raised as ``BackendUnavailableError`` and undecodable bodies as
``MalformedResponseError``; deciding what to show instead is left to the
query service.
"""

from __future__ import annotations

import json
import time
from typing import Any

import httpx

from dashboard.core.config import BackendConfig
from dashboard.core.errors import BackendUnavailableError, MalformedResponseError
from dashboard.core.logging import LoggerMixin

JSON_HEADERS = {"Accept": "application/json"}
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

RawRecord = dict[str, Any]


class TransactionBackendClient(LoggerMixin):
    """Async wrapper around the transactions and history APIs."""

    def __init__(self, config: BackendConfig, *, client: httpx.AsyncClient | None = None) -> None:
        self._transactions_url = config.transactions_base_url.rstrip("/")
        self._history_url = config.history_base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_seconds),
            headers=JSON_HEADERS,
        )
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def fetch_range(self, desde: str, hasta: str) -> list[RawRecord]:
        """Transactions created within ``[desde, hasta]`` (query-format strings)."""
        payload = await self._get(
            f"{self._transactions_url}/recientes",
            params={"desde": desde, "hasta": hasta},
        )
        return self._as_records(payload, "recientes")

    async def fetch_transaction(self, code: str) -> RawRecord | None:
        """Primary record for ``code``; ``None`` when the backend has none."""
        payload = await self._get(f"{self._transactions_url}/{code}", allow_missing=True)
        if payload is None or payload == "" or payload == []:
            return None
        if isinstance(payload, list):
            payload = payload[0]
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                "Transaction lookup returned a non-object body",
                details={"code": code, "type": type(payload).__name__},
            )
        return payload

    async def fetch_history(self, code: str) -> list[RawRecord]:
        """History events for ``code``; empty when the backend has none."""
        payload = await self._get(f"{self._history_url}/transaccion/{code}", allow_missing=True)
        if payload is None or payload == "":
            return []
        return self._as_records(payload, "historial")

    async def fetch_fraud(self) -> list[RawRecord]:
        """Dedicated fraud listing, bypassing intermediary caches."""
        payload = await self._get(
            f"{self._history_url}/fraude",
            params={"_": str(int(time.time() * 1000))},
            headers=NO_CACHE_HEADERS,
        )
        return self._as_records(payload, "fraude")

    async def _get(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        allow_missing: bool = False,
    ) -> Any:
        self.logger.debug("backend_request", url=url, params=params)
        try:
            response = await self._client.get(
                url,
                params=params,
                headers={**JSON_HEADERS, **(headers or {})},
            )
        except httpx.TimeoutException as exc:
            self.logger.error("backend_timeout", url=url, error=str(exc))
            raise BackendUnavailableError(
                "Backend request timed out", details={"url": url}
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error("backend_unreachable", url=url, error=str(exc))
            raise BackendUnavailableError(
                "Backend is not reachable", details={"url": url, "error": str(exc)}
            ) from exc

        if response.status_code == 404 and allow_missing:
            self.logger.info("backend_not_found", url=url)
            return None
        if response.is_error:
            self.logger.error("backend_error_status", url=url, status=response.status_code)
            raise BackendUnavailableError(
                f"Backend answered {response.status_code}",
                details={"url": url, "status": response.status_code},
            )

        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "Backend body is not valid JSON", details={"url": url}
            ) from exc

        # Some deployments double-encode the body as a JSON string
        if isinstance(payload, str) and payload.strip()[:1] in ("[", "{"):
            try:
                payload = json.loads(payload)
            except ValueError as exc:
                raise MalformedResponseError(
                    "Backend body is an undecodable JSON string", details={"url": url}
                ) from exc
        return payload

    def _as_records(self, payload: Any, source: str) -> list[RawRecord]:
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise MalformedResponseError(
                f"Expected a JSON array from {source}",
                details={"source": source, "type": type(payload).__name__},
            )
        records = [item for item in payload if isinstance(item, dict)]
        if len(records) != len(payload):
            self.logger.warning(
                "backend_non_object_rows_dropped",
                source=source,
                dropped=len(payload) - len(records),
            )
        return records

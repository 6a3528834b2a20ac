"""Backend payloads and transport helpers shared by the test suite."""

from collections.abc import Callable

import httpx

BACKEND_HOST = "http://backend.test"
TRANSACTIONS_URL = f"{BACKEND_HOST}/api/v1/transacciones"
HISTORY_URL = f"{BACKEND_HOST}/api/v1/historial"

Handler = Callable[[httpx.Request], httpx.Response]


# =============================================================================
# Raw backend payloads (shapes observed from the processing microservice)
# =============================================================================

RAW_RANGE_RECORDS = [
    {
        "codTransaccion": "1001",
        "codigoUnicoTransaccion": "TRX-1001",
        "estado": "COM",
        "fechaTransaccion": "2025-03-01 14:30:00.123",
        "monto": "150.75",
        "numeroTarjeta": "4532123456789012",
        "marca": "VISA",
        "referencia": "Supermercado",
        "pais": "EC",
    },
    {
        "codTransaccion": "1002",
        "codigoUnicoTransaccion": "TRX-1002",
        "estado": "PEN",
        "fechaTransaccion": "2025-03-01T16:05:00",
        "monto": 80,
        "numeroTarjeta": "5500000000000004",
        "referencia": "Farmacia",
    },
    {
        "codTransaccion": "1003",
        "codigoUnicoTransaccion": "TRX-1003",
        "estado": "FRA",
        "fechaTransaccion": "2025-03-02 09:00:00",
        "monto": "abc",
        "mensaje": "Posible fraude detectado por reglas",
    },
]

RAW_PRIMARY_RECORD = {
    "id": 77,
    "codigoUnicoTransaccion": "TRX-2001",
    "estado": "DEB",
    "fechaCreacion": "2025-03-05 10:15:30",
    "monto": 42.5,
    "referencia": "Compra en línea",
}

RAW_HISTORY = [
    {
        "id": 1,
        "codTransaccion": "TRX-2001",
        "codHistorialEstado": "H-1",
        "estado": "RECIBIDA",
        "fechaEstadoCambio": "2025-03-05 10:15:30",
        "mensaje": "Transacción recibida para tarjeta 4532123456789012",
    },
    {
        "id": 3,
        "codTransaccion": "TRX-2001",
        "codHistorialEstado": "H-3",
        "estado": "DEB",
        "fechaEstadoCambio": "2025-03-05 10:16:10",
        "mensaje": "Débito aplicado",
    },
    {
        "id": 2,
        "codTransaccion": "TRX-2001",
        "codHistorialEstado": "H-2",
        "estado": "VFR",
        "fechaEstadoCambio": "2025-03-05 10:15:50",
        "mensaje": "Validación de fraude superada",
    },
]


def route_backend(routes: dict[str, httpx.Response | Exception]) -> Handler:
    """Handler answering by URL path; unknown paths get 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        outcome = routes.get(request.url.path)
        if outcome is None:
            return httpx.Response(404)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return handler

"""API route for the fraud listing."""

from fastapi import APIRouter

from dashboard.api.routes.transactions import list_response
from dashboard.core.dependencies import TransactionServiceDep
from dashboard.schemas.transaction import TransactionListResponse

router = APIRouter(prefix="/fraud", tags=["fraud"])


@router.get("", response_model=TransactionListResponse)
async def list_fraudulent(service: TransactionServiceDep) -> TransactionListResponse:
    """Transactions flagged as fraud.

    Uses the history service's fraud listing and falls back to scanning the
    recent range when that endpoint is unavailable.
    """
    return list_response(await service.fraudulent())

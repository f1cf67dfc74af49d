"""
Health check endpoints.

Provides liveness and readiness probes. Readiness checks that the card
catalog can be loaded.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from forestscorer.models.failure import CardCatalogError
from forestscorer.services.card_database import get_card_catalog

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None
    card_definitions: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response) -> HealthResponse:
    """
    Readiness probe.

    Returns ready if the card catalog is loaded. Returns 503 otherwise.
    """
    try:
        catalog = get_card_catalog()
    except CardCatalogError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", catalog="unavailable")
    return HealthResponse(status="ready", catalog="loaded", card_definitions=len(catalog))

from typing import Annotated

from fastapi import APIRouter, Depends

from src.core.utils.datetime_utils import get_utc_now
from src.identity.claims import ClaimSet
from src.identity.dependencies import get_current_claims
from src.system.dependencies import get_health_service
from src.system.schemas import HealthCheckResponse
from src.system.services import HealthService

router = APIRouter()
protected_router = APIRouter()


@router.get("/health/", response_model=HealthCheckResponse)
@router.head("/health/", response_model=HealthCheckResponse, include_in_schema=False)
async def check_health(
    health_service: Annotated[HealthService, Depends(get_health_service)],
) -> HealthCheckResponse:
    """Health check endpoint that verifies the service and its cache are running."""
    return await health_service.get_status()


@router.get("/time/", response_model=dict)
def get_utc_time() -> dict[str, str]:
    """Endpoint to get the current UTC time in ISO format."""
    now = get_utc_now()
    return {"time": now.replace(microsecond=0).isoformat()}


@protected_router.get("/test", response_model=str)
async def get_test(
    claims: Annotated[ClaimSet, Depends(get_current_claims)],
) -> str:
    """Only reachable with a valid access token."""
    return "Test"

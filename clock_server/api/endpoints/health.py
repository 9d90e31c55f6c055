from fastapi import APIRouter, Depends

from clock_server.api.deps import get_clock
from clock_server.schemas.clock import HealthStatus
from clock_server.services.clock import Clock, build_health_status

router = APIRouter()


@router.get("", response_model=HealthStatus)
async def health(clock: Clock = Depends(get_clock)) -> HealthStatus:
    """Lightweight health endpoint for liveness checks."""
    return build_health_status(clock)

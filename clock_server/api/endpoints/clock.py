from fastapi import APIRouter, Depends

from clock_server.api.deps import get_clock
from clock_server.schemas.clock import DateTimeInfo
from clock_server.services.clock import Clock, build_datetime_info

router = APIRouter()


@router.get("", response_model=DateTimeInfo)
async def read_datetime(clock: Clock = Depends(get_clock)) -> DateTimeInfo:
    """Current date and time, all fields taken from the same instant."""
    return build_datetime_info(clock)

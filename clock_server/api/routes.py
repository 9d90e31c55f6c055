from fastapi import APIRouter

from clock_server.api.endpoints import clock
from clock_server.api.endpoints import health

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(clock.router, prefix="/datetime", tags=["datetime"])

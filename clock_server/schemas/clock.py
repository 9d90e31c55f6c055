from typing import Literal

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    status: Literal["healthy"] = "healthy"
    timestamp: str = Field(..., description="Current instant, ISO-8601 UTC with milliseconds")


class DateTimeInfo(BaseModel):
    date: str = Field(..., description="Long English date, e.g. 'January 5, 2024'")
    time: str = Field(..., description="12-hour clock time, e.g. '02:30:45 PM'")
    iso: str = Field(..., description="Current instant, ISO-8601 UTC with milliseconds")
    timestamp: int = Field(..., gt=0, description="Milliseconds since the Unix epoch")

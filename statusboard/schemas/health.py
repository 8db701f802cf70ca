from datetime import datetime
from typing import Literal

from statusboard.schemas.base import CamelModel

ServiceStatus = Literal["operational", "degraded", "outage", "unknown"]


class ServiceHealth(CamelModel):
    service_id: str
    name: str
    description: str = ""
    group: str
    status: ServiceStatus
    latency: int | None = None  # ms; None when nothing was measured
    last_checked: datetime
    error: str | None = None


class SystemStatus(CamelModel):
    overall: ServiceStatus
    services: list[ServiceHealth]
    last_updated: datetime
    uptime_percentage: float  # share of services operational in this cycle


class SelfHealthResponse(CamelModel):
    status: str = "healthy"
    service: str = "status-page"
    version: str = "1.0.0"
    timestamp: datetime

import asyncio

import httpx
from fastapi import APIRouter, Depends, Query

from statusboard.api.v1.status import current_status
from statusboard.dependencies import (
    get_http_client,
    get_incident_repository,
    get_probe_timeout,
    get_services,
    get_uptime_store,
)
from statusboard.schemas.services import ServiceConfig
from statusboard.schemas.summary import SummaryResponse
from statusboard.services.incidents.repository import IncidentRepository
from statusboard.services.uptime import DEFAULT_DAYS, UptimeStore, uptime_summary

router = APIRouter()


@router.get("/api/summary")
async def dashboard_summary(
    days: int = Query(DEFAULT_DAYS, description="Uptime window in days, clamped to 1-365"),
    services: tuple[ServiceConfig, ...] = Depends(get_services),
    client: httpx.AsyncClient = Depends(get_http_client),
    timeout: float = Depends(get_probe_timeout),
    store: UptimeStore = Depends(get_uptime_store),
    repository: IncidentRepository = Depends(get_incident_repository),
) -> SummaryResponse:
    """Everything the dashboard page needs, gathered concurrently."""
    status, uptime, active, scheduled = await asyncio.gather(
        current_status(services, client, timeout),
        uptime_summary(store, days),
        repository.get_active_incidents(),
        repository.get_scheduled_maintenance(),
    )
    return SummaryResponse(
        status=status,
        uptime=uptime,
        active_incidents=active,
        scheduled_maintenance=scheduled,
    )

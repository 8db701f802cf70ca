import asyncio

from fastapi import APIRouter, Depends, Query

from statusboard.core.exceptions import InvalidRequestError
from statusboard.dependencies import get_incident_repository
from statusboard.schemas.incidents import (
    IncidentBundleResponse,
    IncidentListResponse,
    MaintenanceListResponse,
)
from statusboard.services.incidents.repository import DEFAULT_RECENT_LIMIT, IncidentRepository

router = APIRouter()

INCIDENT_QUERY_TYPES = ("active", "maintenance", "recent", "all")
MAX_RECENT_LIMIT = 100


@router.get("/api/incidents")
async def list_incidents(
    type: str = Query("active", description="active, maintenance, recent or all"),
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=MAX_RECENT_LIMIT),
    repository: IncidentRepository = Depends(get_incident_repository),
) -> IncidentListResponse | MaintenanceListResponse | IncidentBundleResponse:
    """Incident and maintenance views parsed from the incident documents."""
    if type == "active":
        return IncidentListResponse(incidents=await repository.get_active_incidents())

    if type == "maintenance":
        return MaintenanceListResponse(maintenance=await repository.get_scheduled_maintenance())

    if type == "recent":
        return IncidentListResponse(incidents=await repository.get_recent_incidents(limit))

    if type == "all":
        active, scheduled, recent = await asyncio.gather(
            repository.get_active_incidents(),
            repository.get_scheduled_maintenance(),
            repository.get_recent_incidents(limit),
        )
        return IncidentBundleResponse(
            active_incidents=active,
            scheduled_maintenance=scheduled,
            recent_incidents=recent,
        )

    raise InvalidRequestError(
        "Invalid type parameter.",
        code="invalid_type",
        details={"allowed": list(INCIDENT_QUERY_TYPES)},
    )

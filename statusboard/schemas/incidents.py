from datetime import datetime
from typing import Literal

from pydantic import Field

from statusboard.schemas.base import CamelModel

IncidentType = Literal["incident", "maintenance"]
IncidentSeverity = Literal["minor", "major", "critical"]
IncidentStatus = Literal["investigating", "identified", "monitoring", "resolved"]


class IncidentUpdate(CamelModel):
    timestamp: datetime
    status: IncidentStatus
    message: str = ""


class Incident(CamelModel):
    id: str
    title: str
    type: IncidentType = "incident"
    severity: IncidentSeverity = "minor"
    status: IncidentStatus = "investigating"
    affected_services: list[str] = Field(default_factory=list)
    created_at: datetime
    resolved_at: datetime | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    updates: list[IncidentUpdate] = Field(default_factory=list)  # newest first


class IncidentListResponse(CamelModel):
    incidents: list[Incident]


class MaintenanceListResponse(CamelModel):
    maintenance: list[Incident]


class IncidentBundleResponse(CamelModel):
    active_incidents: list[Incident]
    scheduled_maintenance: list[Incident]
    recent_incidents: list[Incident]

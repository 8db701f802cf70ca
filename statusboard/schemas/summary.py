from statusboard.schemas.base import CamelModel
from statusboard.schemas.health import SystemStatus
from statusboard.schemas.incidents import Incident
from statusboard.schemas.uptime import UptimeResponse


class SummaryResponse(CamelModel):
    status: SystemStatus
    uptime: UptimeResponse
    active_incidents: list[Incident]
    scheduled_maintenance: list[Incident]

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from statusboard.dependencies import get_services
from statusboard.schemas.health import SelfHealthResponse
from statusboard.schemas.services import ServiceConfig, ServiceGroupsResponse
from statusboard.services.registry import services_by_group

router = APIRouter()


@router.get("/api/health")
async def health_check() -> SelfHealthResponse:
    """Liveness of the status page itself."""
    return SelfHealthResponse(timestamp=datetime.now(timezone.utc))


@router.get("/api/services")
async def list_services(
    services: tuple[ServiceConfig, ...] = Depends(get_services),
) -> ServiceGroupsResponse:
    """Configured services, grouped for display."""
    return ServiceGroupsResponse(groups=services_by_group(services))

import httpx
import structlog
from fastapi import APIRouter, Depends

from statusboard.core.exceptions import AggregationError, StatusPageError
from statusboard.dependencies import get_http_client, get_probe_timeout, get_services
from statusboard.schemas.health import SystemStatus
from statusboard.schemas.services import ServiceConfig
from statusboard.services.aggregator import check_all_services

logger = structlog.get_logger()

router = APIRouter()


async def current_status(
    services: tuple[ServiceConfig, ...],
    client: httpx.AsyncClient,
    timeout: float,
) -> SystemStatus:
    """Run one probe cycle; any failure becomes an AggregationError with a generic message."""
    try:
        return await check_all_services(services, client, timeout)
    except StatusPageError as e:
        logger.error("status_aggregation_failed", code=e.code, details=e.details)
        raise AggregationError() from e
    except Exception as e:
        logger.exception("status_aggregation_failed")
        raise AggregationError() from e


@router.get("/api/status")
async def system_status(
    services: tuple[ServiceConfig, ...] = Depends(get_services),
    client: httpx.AsyncClient = Depends(get_http_client),
    timeout: float = Depends(get_probe_timeout),
) -> SystemStatus:
    """Probe every configured service now and report the overall status."""
    return await current_status(services, client, timeout)

"""Status aggregator: fan out probes, reduce per-service statuses to one."""

import asyncio
from collections.abc import Collection, Sequence
from datetime import datetime, timezone
from typing import Callable

import httpx
import structlog

from statusboard.core.exceptions import AggregationError
from statusboard.schemas.health import ServiceHealth, ServiceStatus, SystemStatus
from statusboard.schemas.services import ServiceConfig
from statusboard.services.prober import PROBE_TIMEOUT, probe_service

logger = structlog.get_logger()

# Evaluated top to bottom against the status multiset; first match wins.
OVERALL_RULES: list[tuple[Callable[[list[ServiceStatus]], bool], ServiceStatus]] = [
    (lambda s: all(x == "outage" for x in s), "outage"),
    (lambda s: any(x in ("outage", "degraded") for x in s), "degraded"),
    (lambda s: all(x == "unknown" for x in s), "unknown"),
]
DEFAULT_OVERALL: ServiceStatus = "operational"


def reduce_overall(statuses: Collection[ServiceStatus]) -> ServiceStatus:
    """Reduce per-service statuses to the overall status. Order-independent."""
    statuses = list(statuses)
    if not statuses:
        raise AggregationError(details={"reason": "no services to aggregate"})
    for predicate, overall in OVERALL_RULES:
        if predicate(statuses):
            return overall
    return DEFAULT_OVERALL


def snapshot_uptime(healths: Sequence[ServiceHealth]) -> float:
    """Percentage of services operational in this cycle, 2dp."""
    if not healths:
        return 0.0
    operational = sum(1 for h in healths if h.status == "operational")
    return round(operational / len(healths) * 100, 2)


async def check_all_services(
    services: Sequence[ServiceConfig],
    client: httpx.AsyncClient,
    timeout: float = PROBE_TIMEOUT,
) -> SystemStatus:
    """Probe every service concurrently and wait for all of them to settle."""
    if not services:
        raise AggregationError(details={"reason": "no services configured"})

    results = await asyncio.gather(*(probe_service(s, client, timeout) for s in services))
    overall = reduce_overall([r.status for r in results])

    logger.info(
        "status_cycle_complete",
        overall=overall,
        services=len(results),
        operational=sum(1 for r in results if r.status == "operational"),
    )

    return SystemStatus(
        overall=overall,
        services=list(results),
        last_updated=datetime.now(timezone.utc),
        uptime_percentage=snapshot_uptime(results),
    )

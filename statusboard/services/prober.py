"""Health prober: one bounded-time probe per service, classified into a status."""

import asyncio
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import httpx
import structlog

from statusboard.schemas.health import ServiceHealth, ServiceStatus
from statusboard.schemas.services import ServiceConfig

logger = structlog.get_logger()

PROBE_TIMEOUT = 10.0  # seconds
TIMEOUT_ERROR = "Request timeout"

_PROBE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


@dataclass(frozen=True)
class Measured:
    ms: int


@dataclass(frozen=True)
class Unmeasured:
    pass


Latency = Measured | Unmeasured


@dataclass(frozen=True)
class ProbeOutcome:
    status: ServiceStatus
    latency: Latency
    error: str | None = None


@dataclass(frozen=True)
class _Response:
    """What the classification rules get to see of an HTTP response."""

    status_code: int
    payload_status: str | None


def _is_client_error(r: _Response) -> bool:
    return 400 <= r.status_code < 500


# Evaluated top to bottom; first match wins. 4xx is degraded whatever the payload says.
RESPONSE_RULES: list[tuple[Callable[[_Response], bool], ServiceStatus]] = [
    (lambda r: not _is_client_error(r) and r.payload_status == "unhealthy", "outage"),
    (lambda r: not _is_client_error(r) and r.payload_status == "degraded", "degraded"),
    (lambda r: r.status_code >= 500, "outage"),
    (_is_client_error, "degraded"),
    (lambda r: 200 <= r.status_code < 300, "operational"),
]
FALLBACK_RESPONSE_STATUS: ServiceStatus = "degraded"


def _payload_status(response: httpx.Response) -> str | None:
    """Return the ``status`` field of a JSON health payload, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("status"), str):
        return body["status"].lower()
    return None


def classify_response(status_code: int, payload_status: str | None = None) -> ServiceStatus:
    response = _Response(status_code=status_code, payload_status=payload_status)
    for predicate, status in RESPONSE_RULES:
        if predicate(response):
            return status
    return FALLBACK_RESPONSE_STATUS


async def _fetch(client: httpx.AsyncClient, url: str, timeout: float) -> ProbeOutcome:
    start = time.perf_counter()
    try:
        response = await asyncio.wait_for(
            client.get(url, headers=_PROBE_HEADERS, timeout=timeout),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        return ProbeOutcome(status="outage", latency=Unmeasured(), error=TIMEOUT_ERROR)
    except httpx.HTTPError as e:
        return ProbeOutcome(status="unknown", latency=Unmeasured(), error=str(e) or type(e).__name__)

    latency = Measured(ms=round((time.perf_counter() - start) * 1000))
    payload_status = _payload_status(response)
    status = classify_response(response.status_code, payload_status)
    error = None
    if payload_status in ("degraded", "unhealthy") and not 400 <= response.status_code < 500:
        error = f"Service reported {payload_status}"
    elif status != "operational":
        error = f"HTTP {response.status_code}"
    return ProbeOutcome(status=status, latency=latency, error=error)


async def probe_service(
    service: ServiceConfig,
    client: httpx.AsyncClient,
    timeout: float = PROBE_TIMEOUT,
) -> ServiceHealth:
    """Probe a single service. Never raises; every failure maps to a status."""
    try:
        outcome = await _fetch(client, service.health_url, timeout)
    except Exception as e:
        # Anything outside httpx's hierarchy (bad URL scheme, codec errors, ...)
        outcome = ProbeOutcome(status="unknown", latency=Unmeasured(), error=str(e) or type(e).__name__)

    if outcome.status != "operational":
        logger.warning(
            "probe_failed",
            service=service.id,
            status=outcome.status,
            error=outcome.error,
        )

    return ServiceHealth(
        service_id=service.id,
        name=service.name,
        description=service.description,
        group=service.group,
        status=outcome.status,
        latency=outcome.latency.ms if isinstance(outcome.latency, Measured) else None,
        last_checked=datetime.now(timezone.utc),
        error=outcome.error,
    )

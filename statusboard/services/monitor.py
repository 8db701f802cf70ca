"""Background status monitor: probes all services on an interval and records uptime."""

import asyncio

import httpx
import structlog

from statusboard.schemas.health import ServiceStatus, SystemStatus
from statusboard.schemas.services import ServiceConfig
from statusboard.services.aggregator import check_all_services
from statusboard.services.prober import PROBE_TIMEOUT
from statusboard.services.uptime import UptimeStore

logger = structlog.get_logger()

POLL_INTERVAL = 60  # seconds


def is_up(overall: ServiceStatus) -> bool | None:
    """Map an overall status to one uptime check. None means don't count it."""
    if overall == "unknown":
        return None
    return overall != "outage"


class StatusMonitor:
    """Runs a probe cycle every interval and records the result as one uptime check."""

    def __init__(
        self,
        services: tuple[ServiceConfig, ...],
        http_client: httpx.AsyncClient,
        uptime_store: UptimeStore,
        interval: float = POLL_INTERVAL,
        probe_timeout: float = PROBE_TIMEOUT,
    ):
        self._services = services
        self._http_client = http_client
        self._uptime_store = uptime_store
        self._interval = interval
        self._probe_timeout = probe_timeout
        self._last_status: SystemStatus | None = None
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def last_status(self) -> SystemStatus | None:
        return self._last_status

    async def start(self) -> None:
        """Start the background polling task."""
        if not self._services:
            logger.info("status_monitor_skipped", reason="no services configured")
            return

        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        logger.info("status_monitor_started", services=len(self._services), interval=self._interval)

    async def stop(self) -> None:
        """Stop the background polling task."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("status_monitor_stopped")

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                await self.run_once()
                await asyncio.sleep(self._interval)
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("status_monitor_error")
                await asyncio.sleep(self._interval)

    async def run_once(self) -> SystemStatus:
        """One probe cycle: check everything, record one uptime check, prune old days."""
        status = await check_all_services(self._services, self._http_client, self._probe_timeout)
        self._last_status = status

        up = is_up(status.overall)
        if up is None:
            logger.info("uptime_check_not_counted", overall=status.overall)
        else:
            await self._uptime_store.record_check(up)
        await self._uptime_store.prune()
        return status

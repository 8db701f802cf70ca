from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import statusboard.core.database as db_module
from statusboard.api.v1.router import v1_router
from statusboard.config import settings
from statusboard.core.exceptions import StatusPageError, status_error_handler
from statusboard.core.middleware import RequestLoggingMiddleware
from statusboard.services.incidents.repository import IncidentRepository
from statusboard.services.incidents.sources import FilesystemIncidentSource
from statusboard.services.monitor import StatusMonitor
from statusboard.services.registry import build_registry
from statusboard.services.uptime import UptimeStore

_NAME_TO_LEVEL = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "warn": 30,
    "error": 40,
    "critical": 50,
}

structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _NAME_TO_LEVEL.get(settings.status_log_level.lower(), 20)
    ),
)

logger = structlog.get_logger()


def new_http_client(timeout: float) -> httpx.AsyncClient:
    """Shared probe client: bounded timeouts, redirects followed."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": settings.status_user_agent},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    try:
        await db_module.init_db()
        session_factory = db_module.async_session
    except Exception as exc:
        # History falls back to synthetic data rather than blocking startup.
        logger.warning("uptime_store_unavailable", reason=str(exc))
        session_factory = None

    services = build_registry(settings)
    http_client = new_http_client(settings.status_probe_timeout)
    uptime_store = UptimeStore(session_factory, retention_days=settings.status_retention_days)

    app.state.services = services
    app.state.http_client = http_client
    app.state.probe_timeout = settings.status_probe_timeout
    app.state.uptime_store = uptime_store
    app.state.incident_repository = IncidentRepository(
        FilesystemIncidentSource(settings.status_incidents_dir)
    )

    monitor = StatusMonitor(
        services=services,
        http_client=http_client,
        uptime_store=uptime_store,
        interval=settings.status_poll_interval,
        probe_timeout=settings.status_probe_timeout,
    )
    app.state.status_monitor = monitor
    if settings.status_monitor_enabled:
        await monitor.start()

    logger.info(
        "status_page_starting",
        services=len(services),
        uptime_store_configured=uptime_store.configured,
        incidents_dir=settings.status_incidents_dir,
    )
    yield

    await monitor.stop()
    await http_client.aclose()
    await db_module.close_db()
    logger.info("status_page_stopping")


app = FastAPI(
    title="Status Page",
    description="Public status dashboard API: service health, uptime history and incidents",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_exception_handler(StatusPageError, status_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.status_cors_origins.split(","),
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(v1_router)


@app.get("/")
async def root():
    return {"service": "status-page", "version": "1.0.0"}

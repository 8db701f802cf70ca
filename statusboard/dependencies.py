import httpx
from fastapi import Request

from statusboard.schemas.services import ServiceConfig
from statusboard.services.incidents.repository import IncidentRepository
from statusboard.services.uptime import UptimeStore


def get_services(request: Request) -> tuple[ServiceConfig, ...]:
    """Return the service registry built during lifespan."""
    return request.app.state.services


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the shared probe client stored on app state during lifespan."""
    return request.app.state.http_client


def get_probe_timeout(request: Request) -> float:
    return request.app.state.probe_timeout


def get_uptime_store(request: Request) -> UptimeStore:
    return request.app.state.uptime_store


def get_incident_repository(request: Request) -> IncidentRepository:
    return request.app.state.incident_repository

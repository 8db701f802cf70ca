"""Service registry: the immutable list of monitored services."""

from pathlib import Path

import structlog
import yaml

from statusboard.config import Settings
from statusboard.schemas.services import ServiceConfig, ServiceGroup

logger = structlog.get_logger()

SERVICE_GROUPS = {
    "core": {"name": "Core Services", "order": 1},
    "api": {"name": "API Services", "order": 2},
    "frontend": {"name": "Frontend", "order": 3},
    "infrastructure": {"name": "Infrastructure", "order": 4},
}


def default_services(settings: Settings) -> tuple[ServiceConfig, ...]:
    """Production service list, with per-service URL overrides from settings."""
    return (
        ServiceConfig(
            id="rest-api",
            name="REST API",
            description="External API for trading bot management",
            health_url=settings.rest_api_health_url,
            group="api",
        ),
        ServiceConfig(
            id="graphql",
            name="GraphQL API",
            description="GraphQL backend for dashboards",
            health_url=settings.graphql_health_url,
            group="api",
        ),
        ServiceConfig(
            id="dashboard",
            name="User Dashboard",
            description="Web application for users",
            health_url=settings.dashboard_health_url,
            group="frontend",
        ),
        ServiceConfig(
            id="admin-dashboard",
            name="Admin Dashboard",
            description="Admin panel for management",
            health_url=settings.admin_health_url,
            group="frontend",
        ),
        ServiceConfig(
            id="webhooks",
            name="Webhooks Service",
            description="Webhook delivery service",
            health_url=settings.webhooks_health_url,
            group="core",
        ),
        ServiceConfig(
            id="landing",
            name="Landing Page",
            description="Marketing website",
            health_url=settings.landing_health_url,
            group="frontend",
        ),
    )


def load_services_file(path: str | Path) -> tuple[ServiceConfig, ...]:
    """Load a service list from YAML: a top-level ``services`` list of mappings."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("services", [])
    services = tuple(ServiceConfig.model_validate(entry) for entry in entries)

    ids = [s.id for s in services]
    if len(ids) != len(set(ids)):
        raise ValueError(f"Duplicate service ids in {path}")
    return services


def build_registry(settings: Settings) -> tuple[ServiceConfig, ...]:
    """Build the registry once at startup; callers pass it explicitly from then on."""
    if settings.status_services_file:
        services = load_services_file(settings.status_services_file)
        logger.info("registry_loaded", source=settings.status_services_file, services=len(services))
        return services
    return default_services(settings)


def services_by_group(services: tuple[ServiceConfig, ...] | list[ServiceConfig]) -> list[ServiceGroup]:
    """Group services for display, ordered by group order then registry order."""
    grouped: dict[str, list[ServiceConfig]] = {}
    for service in services:
        grouped.setdefault(service.group, []).append(service)

    return [
        ServiceGroup(
            key=key,
            name=SERVICE_GROUPS[key]["name"],
            order=SERVICE_GROUPS[key]["order"],
            services=members,
        )
        for key, members in sorted(grouped.items(), key=lambda kv: SERVICE_GROUPS[kv[0]]["order"])
    ]

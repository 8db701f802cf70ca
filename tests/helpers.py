"""Shared test data and builders."""

from datetime import datetime, timezone

from statusboard.schemas.services import ServiceConfig

FAKE_BASE_URL = "http://fake-services"

SERVICE_IDS = ["rest-api", "graphql", "dashboard", "admin-dashboard", "webhooks", "landing"]
SERVICE_GROUPS = ["api", "api", "frontend", "frontend", "core", "frontend"]


def make_services(ids=None) -> tuple[ServiceConfig, ...]:
    """Registry pointing every service at the fake health app."""
    ids = SERVICE_IDS if ids is None else ids
    groups = dict(zip(SERVICE_IDS, SERVICE_GROUPS))
    return tuple(
        ServiceConfig(
            id=sid,
            name=sid.replace("-", " ").title(),
            description=f"{sid} service",
            health_url=f"{FAKE_BASE_URL}/health/{sid}",
            group=groups.get(sid, "core"),
        )
        for sid in ids
    )


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


INCIDENT_DOCS = {
    "2025-01-10-webhook-delays": """---
title: Webhook delivery delays
type: incident
severity: minor
affected: [webhooks]
created: 2025-01-10T08:00:00Z
resolved: 2025-01-10T09:00:00Z
---

### 2025-01-10T09:00:00Z - Resolved
Deliveries have caught up.

### 2025-01-10T08:05:00Z - Investigating
Webhooks are delayed by several minutes.
""",
    "2025-02-01-api-errors": """---
title: Elevated API error rates
type: incident
severity: major
affected: [rest-api, graphql]
created: 2025-02-01T10:00:00Z
---

### 2025-02-01T10:30:00Z - Identified
A bad deploy is being rolled back.

### 2025-02-01T10:05:00Z - Investigating
We are seeing elevated 5xx responses.
""",
    "2099-06-01-database-upgrade": """---
title: Database upgrade
type: maintenance
severity: minor
status: identified
affected: [rest-api]
created: 2025-03-01T00:00:00Z
scheduled_start: 2099-06-01T02:00:00Z
scheduled_end: 2099-06-01T04:00:00Z
---
""",
}

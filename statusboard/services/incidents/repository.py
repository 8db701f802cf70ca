"""Incident repository: read-through views over incident documents."""

import asyncio
from datetime import datetime, timezone

import structlog

from statusboard.core.exceptions import IncidentParseError
from statusboard.schemas.incidents import Incident
from statusboard.services.incidents.parser import parse_incident
from statusboard.services.incidents.sources import IncidentSource

logger = structlog.get_logger()

DEFAULT_RECENT_LIMIT = 10

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class IncidentRepository:
    """Loads incidents from a source on every call; nothing is cached."""

    def __init__(self, source: IncidentSource):
        self._source = source

    async def load_incidents(self) -> list[Incident]:
        """All parseable incidents, most recent id first. Malformed documents are skipped."""
        try:
            documents = await asyncio.to_thread(self._source.list_documents)
        except OSError:
            logger.exception("incident_source_unavailable")
            return []

        incidents = []
        for doc_id, content in documents:
            try:
                incidents.append(parse_incident(doc_id, content))
            except IncidentParseError as e:
                logger.warning("incident_parse_failed", incident=doc_id, error=e.message, details=e.details)

        incidents.sort(key=lambda i: i.id, reverse=True)
        return incidents

    async def get_active_incidents(self) -> list[Incident]:
        incidents = await self.load_incidents()
        return [i for i in incidents if i.type == "incident" and i.status != "resolved"]

    async def get_scheduled_maintenance(self, now: datetime | None = None) -> list[Incident]:
        """Unresolved maintenance that hasn't ended, soonest first (undated first)."""
        now = now or datetime.now(timezone.utc)
        incidents = await self.load_incidents()
        upcoming = [
            i
            for i in incidents
            if i.type == "maintenance"
            and i.status != "resolved"
            and (i.scheduled_end is None or i.scheduled_end >= now)
        ]
        return sorted(upcoming, key=lambda i: i.scheduled_start or _EPOCH)

    async def get_recent_incidents(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[Incident]:
        incidents = await self.load_incidents()
        return incidents[:max(limit, 0)]

"""Incident document parser.

A document is an optional metadata block followed by a body of timestamped
update sections::

    ---
    title: Elevated API error rates
    type: incident
    severity: major
    status: investigating
    affected: [rest-api, graphql]
    created: 2025-01-15T10:00:00Z
    resolved: 2025-01-15T12:30:00Z
    ---

    ### 2025-01-15T12:30:00Z - Resolved
    Error rates are back to normal.

    ### 2025-01-15T10:05:00Z - Investigating
    We are looking into elevated 5xx responses.

Maintenance documents set ``type: maintenance`` and may carry
``scheduled_start`` / ``scheduled_end``.
"""

import re
from datetime import datetime, timezone

import structlog
from pydantic import ValidationError

from statusboard.core.exceptions import IncidentParseError
from statusboard.schemas.incidents import Incident, IncidentUpdate

logger = structlog.get_logger()

_FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n(.*))?\Z", re.DOTALL)
_UPDATE_RE = re.compile(
    r"^###[ \t]+(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)[ \t]+-[ \t]+(\w+)[ \t]*$",
    re.MULTILINE,
)

DEFAULT_TITLE = "Untitled Incident"


def parse_metadata(content: str) -> tuple[dict[str, str | list[str]], str]:
    """Split a document into its metadata mapping and body.

    Values wrapped in brackets become lists. A document without a metadata
    block is all body.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}, content

    data: dict[str, str | list[str]] = {}
    for line in match.group(1).splitlines():
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        value = value.strip()
        if value.startswith("[") and value.endswith("]"):
            data[key] = [v.strip() for v in value[1:-1].split(",") if v.strip()]
        else:
            data[key] = value
    return data, match.group(2) or ""


def parse_timestamp(value: str) -> datetime:
    """ISO 8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise IncidentParseError(f"Invalid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_updates(body: str) -> list[IncidentUpdate]:
    """Update sections from the body, newest first.

    A section whose status keyword is not a known incident status is logged
    and left out; the rest of the document still parses.
    """
    headings = list(_UPDATE_RE.finditer(body))
    updates = []
    for i, heading in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(body)
        try:
            update = IncidentUpdate(
                timestamp=parse_timestamp(heading.group(1)),
                status=heading.group(2).lower(),
                message=body[heading.end():end].strip(),
            )
        except ValidationError:
            logger.warning("incident_update_skipped", heading=heading.group(0).strip())
            continue
        updates.append(update)
    return sorted(updates, key=lambda u: u.timestamp, reverse=True)


def _scalar(data: dict, key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, list):
        value = ", ".join(value)
    return value or None


def _optional_timestamp(data: dict, key: str) -> datetime | None:
    value = _scalar(data, key)
    return parse_timestamp(value) if value else None


def _affected(data: dict) -> list[str]:
    value = data.get("affected")
    if isinstance(value, list):
        return value
    if not value:
        return []
    return [s.strip() for s in value.split(",") if s.strip()]


def parse_incident(doc_id: str, content: str, now: datetime | None = None) -> Incident:
    """Parse one incident document.

    The effective status is the newest update's status, else the metadata
    ``status``, else ``investigating``. Raises IncidentParseError on invalid
    values.
    """
    data, body = parse_metadata(content.replace("\r\n", "\n"))

    try:
        updates = parse_updates(body)
        created = _optional_timestamp(data, "created") or now or datetime.now(timezone.utc)
        status = updates[0].status if updates else (_scalar(data, "status") or "investigating").lower()

        return Incident(
            id=doc_id,
            title=_scalar(data, "title") or DEFAULT_TITLE,
            type=(_scalar(data, "type") or "incident").lower(),
            severity=(_scalar(data, "severity") or "minor").lower(),
            status=status,
            affected_services=_affected(data),
            created_at=created,
            resolved_at=_optional_timestamp(data, "resolved"),
            scheduled_start=_optional_timestamp(data, "scheduled_start"),
            scheduled_end=_optional_timestamp(data, "scheduled_end"),
            updates=updates,
        )
    except ValidationError as e:
        raise IncidentParseError(
            f"Invalid incident document {doc_id!r}",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e

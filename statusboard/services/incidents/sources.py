"""Backing stores for incident documents."""

from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()


class IncidentSource(Protocol):
    """Anything that can enumerate incident documents as (id, text) pairs."""

    def list_documents(self) -> list[tuple[str, str]]: ...


class FilesystemIncidentSource:
    """One markdown file per incident; the file stem is the incident id."""

    def __init__(self, directory: str | Path, suffix: str = ".md"):
        self._directory = Path(directory)
        self._suffix = suffix

    @property
    def directory(self) -> Path:
        return self._directory

    def list_documents(self) -> list[tuple[str, str]]:
        if not self._directory.exists():
            self._directory.mkdir(parents=True, exist_ok=True)
            logger.info("incidents_dir_created", path=str(self._directory))
            return []

        documents = []
        for path in sorted(self._directory.glob(f"*{self._suffix}")):
            try:
                documents.append((path.stem, path.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError):
                logger.exception("incident_read_failed", file=path.name)
        return documents


class InMemoryIncidentSource:
    """Documents held in a dict. Used for tests and for embedding fixed content."""

    def __init__(self, documents: dict[str, str] | None = None):
        self._documents = dict(documents or {})

    def list_documents(self) -> list[tuple[str, str]]:
        return sorted(self._documents.items())

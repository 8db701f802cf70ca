"""Uptime store: durable daily check counters and rolling-window percentages."""

from datetime import date, datetime, timedelta, timezone

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from statusboard.core.database import DailyUptimeRecord
from statusboard.schemas.uptime import DailyUptime, UptimeResponse

logger = structlog.get_logger()

MIN_DAYS = 1
MAX_DAYS = 365
DEFAULT_DAYS = 90
MIN_RETENTION_DAYS = 95


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def clamp_days(days: int) -> int:
    return min(max(days, MIN_DAYS), MAX_DAYS)


def _window(days: int, today: date) -> list[str]:
    """ISO dates of the window, oldest first, ending today."""
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def synthetic_history(days: int, today: date | None = None) -> list[DailyUptime]:
    """100% entries for every day in the window."""
    today = today or _utc_today()
    return [DailyUptime.from_counts(d) for d in _window(clamp_days(days), today)]


def calculate_uptime_percentage(history: list[DailyUptime]) -> float:
    """Check-weighted uptime over the history. Days without checks don't count."""
    with_checks = [d for d in history if d.checks > 0]
    if not with_checks:
        return 100.0

    total_checks = sum(d.checks for d in with_checks)
    total_failures = sum(d.failures for d in with_checks)
    return (total_checks - total_failures) / total_checks * 100


def _insert_for(session: AsyncSession):
    """Dialect-specific INSERT supporting ON CONFLICT DO UPDATE."""
    dialect = session.bind.dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise NotImplementedError(f"Atomic upsert not supported for dialect {dialect!r}")


class UptimeStore:
    """Daily uptime counters keyed by UTC date.

    Without a session factory the store is unconfigured: writes are skipped
    and reads return synthetic 100% history, so the dashboard keeps rendering.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker | None,
        retention_days: int = MIN_RETENTION_DAYS,
    ):
        self._session_factory = session_factory
        self._retention_days = max(retention_days, MIN_RETENTION_DAYS)

    @property
    def configured(self) -> bool:
        return self._session_factory is not None

    async def record_check(self, is_up: bool, today: date | None = None) -> DailyUptime | None:
        """Count one check against today. Returns the updated counters, or None if not stored."""
        if not self.configured:
            logger.debug("uptime_record_skipped", reason="store not configured")
            return None

        key = (today or _utc_today()).isoformat()
        failed = 0 if is_up else 1

        try:
            async with self._session_factory() as session:
                insert = _insert_for(session)
                stmt = insert(DailyUptimeRecord).values(date=key, checks=1, failures=failed)
                # Single statement: concurrent checks on the same day never lose increments.
                stmt = stmt.on_conflict_do_update(
                    index_elements=[DailyUptimeRecord.date],
                    set_={
                        "checks": DailyUptimeRecord.checks + 1,
                        "failures": DailyUptimeRecord.failures + stmt.excluded.failures,
                        "updated_at": func.now(),
                    },
                ).returning(DailyUptimeRecord.checks, DailyUptimeRecord.failures)
                result = await session.execute(stmt)
                checks, failures = result.one()
                await session.commit()
        except (SQLAlchemyError, OSError, NotImplementedError):
            logger.exception("uptime_record_failed", date=key)
            return None

        return DailyUptime.from_counts(key, checks, failures)

    async def get_uptime_history(self, days: int = DEFAULT_DAYS, today: date | None = None) -> list[DailyUptime]:
        """Exactly ``days`` entries (clamped to 1-365), oldest first, ending today."""
        days = clamp_days(days)
        today = today or _utc_today()

        if not self.configured:
            logger.info("uptime_history_fallback", reason="store not configured", days=days)
            return synthetic_history(days, today)

        window = _window(days, today)
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(DailyUptimeRecord).where(
                        DailyUptimeRecord.date >= window[0],
                        DailyUptimeRecord.date <= window[-1],
                    )
                )
                rows = {r.date: r for r in result.scalars().all()}
        except (SQLAlchemyError, OSError):
            logger.exception("uptime_history_fallback", reason="query failed", days=days)
            return synthetic_history(days, today)

        history = []
        for day in window:
            row = rows.get(day)
            if row is None:
                history.append(DailyUptime.from_counts(day))
            else:
                history.append(DailyUptime.from_counts(day, row.checks, row.failures))
        return history

    async def prune(self, today: date | None = None) -> int:
        """Delete day records older than the retention window. Returns rows removed."""
        if not self.configured:
            return 0

        cutoff = ((today or _utc_today()) - timedelta(days=self._retention_days)).isoformat()
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(DailyUptimeRecord).where(DailyUptimeRecord.date < cutoff)
                )
                await session.commit()
        except (SQLAlchemyError, OSError):
            logger.exception("uptime_prune_failed", cutoff=cutoff)
            return 0

        removed = result.rowcount or 0
        if removed:
            logger.info("uptime_pruned", removed=removed, cutoff=cutoff)
        return removed


async def uptime_summary(store: UptimeStore, days: int = DEFAULT_DAYS) -> UptimeResponse:
    """History plus check-weighted total (2dp) for the clamped window."""
    period = clamp_days(days)
    history = await store.get_uptime_history(period)
    return UptimeResponse(
        days=history,
        total_uptime=round(calculate_uptime_percentage(history), 2),
        period=period,
    )

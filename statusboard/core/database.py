import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from statusboard.config import settings


class Base(DeclarativeBase):
    pass


class DailyUptimeRecord(Base):
    """One row per UTC calendar day. Mutated only through an atomic upsert."""

    __tablename__ = "daily_uptime"

    date: Mapped[str] = mapped_column(String(10), primary_key=True)  # YYYY-MM-DD
    checks: Mapped[int] = mapped_column(Integer, default=0)
    failures: Mapped[int] = mapped_column(Integer, default=0)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


# ── Engine & Session ──────────────────────────────────────────────────────────

# Both stay None when no database is configured; the uptime store then serves
# synthetic data.
engine: AsyncEngine | None = (
    create_async_engine(settings.status_db_url, echo=False) if settings.status_db_url else None
)
async_session: async_sessionmaker | None = (
    async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False) if engine else None
)


async def init_db() -> None:
    """Ensure database schema is up to date via Alembic migrations."""
    if engine is None:
        return

    from statusboard.core.migrations import ensure_db_migrated

    await ensure_db_migrated()


async def close_db() -> None:
    """Dispose of the engine."""
    if engine is not None:
        await engine.dispose()

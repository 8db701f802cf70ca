from fastapi import APIRouter, Depends, Query

from statusboard.dependencies import get_uptime_store
from statusboard.schemas.uptime import UptimeResponse
from statusboard.services.uptime import DEFAULT_DAYS, UptimeStore, uptime_summary

router = APIRouter()


@router.get("/api/uptime")
async def uptime_history(
    days: int = Query(DEFAULT_DAYS, description="Window in days, clamped to 1-365"),
    store: UptimeStore = Depends(get_uptime_store),
) -> UptimeResponse:
    """Daily uptime history and the check-weighted total over the window."""
    return await uptime_summary(store, days)

from fastapi import APIRouter

from statusboard.api.v1.health import router as health_router
from statusboard.api.v1.incidents import router as incidents_router
from statusboard.api.v1.status import router as status_router
from statusboard.api.v1.summary import router as summary_router
from statusboard.api.v1.uptime import router as uptime_router

v1_router = APIRouter()

v1_router.include_router(health_router, tags=["Health"])
v1_router.include_router(status_router, tags=["Status"])
v1_router.include_router(uptime_router, tags=["Uptime"])
v1_router.include_router(incidents_router, tags=["Incidents"])
v1_router.include_router(summary_router, tags=["Summary"])

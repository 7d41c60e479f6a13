"""
Inventory API: Root and Health Check Routes
=============================================

What:  GET / (service banner) and GET /health (monitoring probe).
Who:   Humans poking at the server; Docker health checks and load balancers.

Status levels (/health):
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from app import __version__
from app.schemas.common import HealthResponse, RootResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_model=RootResponse, summary="Service banner")
async def root() -> RootResponse:
    return RootResponse(
        message="Selamat datang di Inventory API",
        documentation="/docs",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Probes the database with SELECT 1 and reports uptime.

    Probes call this every 10-30 seconds, so it does nothing heavier.
    """
    connected = await request.app.state.database.ping()
    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )

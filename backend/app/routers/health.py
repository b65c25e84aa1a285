import asyncio
from typing import Any

from fastapi import APIRouter, Request, Response
from loguru import logger

from backend.app.core import SERVICE_NAME
from backend.app.routers.utils import readiness_ping_timeout_seconds

health_router = APIRouter(prefix="/health", tags=["Health"])


def _not_ready(event: str, content: str) -> Response:
    logger.bind(service_name=SERVICE_NAME, event=event).info("")
    return Response(status_code=503, content=content)


@health_router.get("/live", summary="Process is up")
async def live() -> dict[str, Any]:
    return {"status": "ok"}


@health_router.get(
    "/ready",
    summary="MongoDB answers ping",
    responses={503: {"description": "No connection handed over yet, or ping failed or timed out."}},
)
async def ready(request: Request) -> Response:
    database = getattr(request.app.state, "database", None)
    if database is None:
        return _not_ready("db_not_attached", "Not ready")
    try:
        ping_ok = await asyncio.wait_for(database.ping(), timeout=readiness_ping_timeout_seconds(request))
    except asyncio.TimeoutError:
        return _not_ready("db_ping_timeout", "Database not ready")
    if not ping_ok:
        return _not_ready("db_ping_failed", "Database not ready")
    return Response(status_code=200, content="OK")

from __future__ import annotations

from typing import Any

from fastapi import Request, Response
from loguru import logger

from backend.app.core import SERVICE_NAME
from backend.app.schemas.tutorial import MessageResponse

READINESS_PING_TIMEOUT_DEFAULT = 5.0


def readiness_ping_timeout_seconds(request: Request) -> float:
    settings = getattr(request.app.state, "settings", None)
    return getattr(settings, "readiness_ping_timeout_seconds", READINESS_PING_TIMEOUT_DEFAULT)


def message_response(status_code: int, message: str) -> Response:
    """``{"message": ...}`` JSON body, the shape every tutorial route answers with."""
    return Response(
        status_code=status_code,
        media_type="application/json",
        content=MessageResponse(message=message).model_dump_json(),
    )


def log_failure(event: str, **kwargs: Any) -> None:
    """Log the active exception with the route's event name."""
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).exception("")

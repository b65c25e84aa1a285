"""
Request-body parsing and cross-origin policy installed on the app before startup completes.

Body parsers are registered per media type on ``app.state.body_parsers``; handlers read
payloads through ``read_payload``. A request whose media type has no registered parser
yields an empty payload, the same as a request without a body.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from backend.app.constants import FORM_MEDIA_TYPE, JSON_MEDIA_TYPE

BodyParser = Callable[[Request], Awaitable[dict[str, Any]]]


class InvalidRequestBody(ValueError):
    """Body could not be decoded into a JSON object or form mapping."""


async def parse_json_body(request: Request) -> dict[str, Any]:
    if not (await request.body()).strip():
        return {}
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidRequestBody(str(e)) from e
    if not isinstance(payload, dict):
        raise InvalidRequestBody("expected a JSON object")
    return payload


async def parse_form_body(request: Request) -> dict[str, Any]:
    form = await request.form()
    return {key: value for key, value in form.multi_items()}


def install_body_parsers(app: FastAPI) -> None:
    app.state.body_parsers = {
        JSON_MEDIA_TYPE: parse_json_body,
        FORM_MEDIA_TYPE: parse_form_body,
    }


def install_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


async def read_payload(request: Request) -> dict[str, Any]:
    """Decode the request body with the parser registered for its media type."""
    parsers: dict[str, BodyParser] = getattr(request.app.state, "body_parsers", None) or {}
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    parser = parsers.get(media_type)
    if parser is None:
        return {}
    return await parser(request)

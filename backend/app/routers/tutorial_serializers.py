"""Helpers to serialize stored tutorial documents into API responses."""
from __future__ import annotations

from typing import Any, Iterable

from fastapi import Response
from pydantic import TypeAdapter

from backend.app.schemas.tutorial import TutorialResponse

_TUTORIAL_LIST = TypeAdapter(list[TutorialResponse])


def tutorial_from_document(document: dict[str, Any]) -> TutorialResponse:
    """Map a stored document to its public shape: ``_id`` becomes ``id``, driver internals are dropped."""
    return TutorialResponse(
        id=str(document["_id"]),
        title=str(document.get("title") or ""),
        description=document.get("description"),
        published=bool(document.get("published", False)),
        createdAt=document.get("createdAt"),
        updatedAt=document.get("updatedAt"),
    )


def tutorial_response(document: dict[str, Any]) -> Response:
    return Response(
        status_code=200,
        media_type="application/json",
        content=tutorial_from_document(document).model_dump_json(by_alias=True),
    )


def tutorial_list_response(documents: Iterable[dict[str, Any]]) -> Response:
    items = [tutorial_from_document(doc) for doc in documents]
    return Response(
        status_code=200,
        media_type="application/json",
        content=_TUTORIAL_LIST.dump_json(items, by_alias=True),
    )

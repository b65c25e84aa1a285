from __future__ import annotations

from fastapi import APIRouter, Request, Response
from pydantic import ValidationError

from backend.app.middleware import InvalidRequestBody, read_payload
from backend.app.ports.tutorial_repository import TutorialRepository
from backend.app.routers.tutorial_serializers import tutorial_list_response, tutorial_response
from backend.app.routers.utils import log_failure, message_response
from backend.app.schemas.tutorial import TutorialCreateRequest, TutorialUpdateRequest

tutorial_router = APIRouter(prefix="/api/tutorials", tags=["Tutorials"])

_UNAVAILABLE = "Database not available"


def _repository(request: Request) -> TutorialRepository | None:
    return getattr(request.app.state, "tutorial_repository", None)


@tutorial_router.post(
    "",
    summary="Create a tutorial",
    description="Accepts a JSON or URL-encoded form body. `title` is required.",
    responses={
        200: {"description": "Tutorial created and returned."},
        400: {"description": "Missing title or unreadable body."},
        500: {"description": "Database error."},
        503: {"description": "Database not available."},
    },
)
async def create_tutorial(request: Request) -> Response:
    repo = _repository(request)
    if repo is None:
        return message_response(503, _UNAVAILABLE)
    try:
        payload = await read_payload(request)
    except InvalidRequestBody:
        return message_response(400, "Invalid request body.")
    if not payload.get("title"):
        return message_response(400, "Content can not be empty!")
    try:
        body = TutorialCreateRequest.model_validate(payload)
    except ValidationError:
        return message_response(400, "Invalid Tutorial data.")

    try:
        document = await repo.create(body.model_dump())
    except Exception:
        log_failure("create_tutorial_error")
        return message_response(500, "Some error occurred while creating the Tutorial.")
    return tutorial_response(document)


@tutorial_router.get(
    "",
    summary="List tutorials",
    responses={200: {"description": "All tutorials."}, 500: {"description": "Database error."}},
)
async def list_tutorials(request: Request) -> Response:
    repo = _repository(request)
    if repo is None:
        return message_response(503, _UNAVAILABLE)
    try:
        documents = await repo.find_all()
    except Exception:
        log_failure("list_tutorials_error")
        return message_response(500, "Some error occurred while retrieving tutorials.")
    return tutorial_list_response(documents)


@tutorial_router.get(
    "/published",
    summary="List published tutorials",
    responses={200: {"description": "Tutorials with published=true."}, 500: {"description": "Database error."}},
)
async def list_published_tutorials(request: Request) -> Response:
    repo = _repository(request)
    if repo is None:
        return message_response(503, _UNAVAILABLE)
    try:
        documents = await repo.find_published()
    except Exception:
        log_failure("list_published_tutorials_error")
        return message_response(500, "Some error occurred while retrieving tutorials.")
    return tutorial_list_response(documents)


@tutorial_router.get(
    "/{tutorial_id}",
    summary="Get a tutorial",
    responses={
        200: {"description": "Tutorial found."},
        404: {"description": "Unknown or malformed id."},
        500: {"description": "Database error."},
    },
)
async def get_tutorial(request: Request, tutorial_id: str) -> Response:
    repo = _repository(request)
    if repo is None:
        return message_response(503, _UNAVAILABLE)
    try:
        document = await repo.find_by_id(tutorial_id)
    except Exception:
        log_failure("get_tutorial_error", tutorial_id=tutorial_id)
        return message_response(500, f"Error retrieving Tutorial with id={tutorial_id}")
    if document is None:
        return message_response(404, f"Not found Tutorial with id {tutorial_id}")
    return tutorial_response(document)


@tutorial_router.put(
    "/{tutorial_id}",
    summary="Update a tutorial",
    description="Only title, description and published are applied; other fields are ignored.",
    responses={
        200: {"description": "Tutorial updated."},
        400: {"description": "Empty or unreadable body."},
        404: {"description": "Unknown or malformed id."},
        500: {"description": "Database error."},
    },
)
async def update_tutorial(request: Request, tutorial_id: str) -> Response:
    repo = _repository(request)
    if repo is None:
        return message_response(503, _UNAVAILABLE)
    try:
        payload = await read_payload(request)
    except InvalidRequestBody:
        return message_response(400, "Invalid request body.")
    if not payload:
        return message_response(400, "Data to update can not be empty!")
    try:
        changes = TutorialUpdateRequest.model_validate(payload).model_dump(exclude_unset=True)
    except ValidationError:
        return message_response(400, "Invalid Tutorial data.")

    try:
        updated = await repo.update(tutorial_id, changes)
    except Exception:
        log_failure("update_tutorial_error", tutorial_id=tutorial_id)
        return message_response(500, f"Error updating Tutorial with id={tutorial_id}")
    if not updated:
        return message_response(404, f"Cannot update Tutorial with id={tutorial_id}. Maybe Tutorial was not found!")
    return message_response(200, "Tutorial was updated successfully.")


@tutorial_router.delete(
    "/{tutorial_id}",
    summary="Delete a tutorial",
    responses={
        200: {"description": "Tutorial deleted."},
        404: {"description": "Unknown or malformed id."},
        500: {"description": "Database error."},
    },
)
async def delete_tutorial(request: Request, tutorial_id: str) -> Response:
    repo = _repository(request)
    if repo is None:
        return message_response(503, _UNAVAILABLE)
    try:
        deleted = await repo.delete(tutorial_id)
    except Exception:
        log_failure("delete_tutorial_error", tutorial_id=tutorial_id)
        return message_response(500, f"Could not delete Tutorial with id={tutorial_id}")
    if not deleted:
        return message_response(404, f"Cannot delete Tutorial with id={tutorial_id}. Maybe Tutorial was not found!")
    return message_response(200, "Tutorial was deleted successfully!")


@tutorial_router.delete(
    "",
    summary="Delete all tutorials",
    responses={200: {"description": "Count of deleted tutorials."}, 500: {"description": "Database error."}},
)
async def delete_all_tutorials(request: Request) -> Response:
    repo = _repository(request)
    if repo is None:
        return message_response(503, _UNAVAILABLE)
    try:
        count = await repo.delete_all()
    except Exception:
        log_failure("delete_all_tutorials_error")
        return message_response(500, "Some error occurred while removing all tutorials.")
    return message_response(200, f"{count} Tutorials were deleted successfully!")

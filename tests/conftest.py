from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from bson import ObjectId
from fastapi import FastAPI

from backend.app.core.errors import DatabaseConnectionError
from backend.app.middleware import install_body_parsers
from backend.app.routers.mount import mount_routes
from backend.app.routers.welcome import welcome_router


class FakeDatabase:
    """Implements DatabaseConnection for tests. Full protocol so connect/close/ready won't break callers."""

    def __init__(
        self,
        ping_ok: bool = True,
        *,
        fail_with: Exception | None = None,
        on_connect: Callable[[], None] | None = None,
    ) -> None:
        self._ping_ok = ping_ok
        self._ready = False
        self._fail_with = fail_with
        self._on_connect = on_connect
        self.connect_calls = 0
        self.closed = False

    @property
    def ready(self) -> bool:
        return self._ready

    async def connect(self) -> None:
        self.connect_calls += 1
        if self._on_connect is not None:
            self._on_connect()
        if self._fail_with is not None:
            raise self._fail_with
        self._ready = True

    async def ping(self) -> bool:
        return self._ping_ok

    async def close(self) -> None:
        self._ready = False
        self.closed = True


def unreachable_database(**kwargs: Any) -> FakeDatabase:
    return FakeDatabase(
        fail_with=DatabaseConnectionError("mongo:27017: [Errno -2] Name or service not known"),
        **kwargs,
    )


class FakeTutorialRepository:
    """Implements TutorialRepository in memory, keyed by ObjectId hex string."""

    def __init__(
        self,
        documents: list[dict[str, Any]] | None = None,
        *,
        raise_on_call: Exception | None = None,
    ) -> None:
        self._documents: dict[str, dict[str, Any]] = {str(doc["_id"]): doc for doc in documents or []}
        self._raise_on_call = raise_on_call

    def _check(self) -> None:
        if self._raise_on_call is not None:
            raise self._raise_on_call

    def get(self, tutorial_id: str) -> dict[str, Any] | None:
        return self._documents.get(tutorial_id)

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        self._check()
        now = datetime.now(timezone.utc)
        document = {
            "_id": ObjectId(),
            "title": data["title"],
            "description": data.get("description"),
            "published": bool(data.get("published", False)),
            "createdAt": now,
            "updatedAt": now,
        }
        self._documents[str(document["_id"])] = document
        return document

    async def find_all(self) -> list[dict[str, Any]]:
        self._check()
        return list(self._documents.values())

    async def find_published(self) -> list[dict[str, Any]]:
        self._check()
        return [doc for doc in self._documents.values() if doc.get("published")]

    async def find_by_id(self, tutorial_id: str) -> dict[str, Any] | None:
        self._check()
        return self._documents.get(tutorial_id)

    async def update(self, tutorial_id: str, changes: dict[str, Any]) -> bool:
        self._check()
        document = self._documents.get(tutorial_id)
        if document is None:
            return False
        document.update(changes)
        document["updatedAt"] = datetime.now(timezone.utc)
        return True

    async def delete(self, tutorial_id: str) -> bool:
        self._check()
        return self._documents.pop(tutorial_id, None) is not None

    async def delete_all(self) -> int:
        self._check()
        count = len(self._documents)
        self._documents.clear()
        return count


def make_tutorial(title: str, *, published: bool = False, description: str | None = None) -> dict[str, Any]:
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return {
        "_id": ObjectId(),
        "title": title,
        "description": description,
        "published": published,
        "createdAt": created,
        "updatedAt": created,
    }


class FakeServer:
    """Stands in for uvicorn.Server: records that it served and returns at once."""

    def __init__(self, app: FastAPI, events: list[str] | None = None) -> None:
        self.app = app
        self.started = False
        self._events = events if events is not None else []

    async def serve(self) -> None:
        self._events.append("listen")
        self.started = True


@pytest.fixture()
def test_app() -> FastAPI:
    app = FastAPI()
    install_body_parsers(app)
    app.state.database = FakeDatabase()
    app.state.tutorial_repository = FakeTutorialRepository()
    app.include_router(welcome_router)
    mount_routes(app)
    return app


@pytest.fixture()
def log_messages():
    from loguru import logger

    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)

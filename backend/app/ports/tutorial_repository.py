"""Port: tutorial persistence used by the tutorial routes."""
from __future__ import annotations

from typing import Any, Protocol


class TutorialRepository(Protocol):
    """CRUD over stored tutorial documents.

    Documents are plain dicts keyed as stored (``_id``, ``title``, ``description``,
    ``published``, ``createdAt``, ``updatedAt``). Unknown or malformed ids behave as missing.
    """

    async def create(self, data: dict[str, Any]) -> dict[str, Any]: ...

    async def find_all(self) -> list[dict[str, Any]]: ...

    async def find_published(self) -> list[dict[str, Any]]: ...

    async def find_by_id(self, tutorial_id: str) -> dict[str, Any] | None: ...

    async def update(self, tutorial_id: str, changes: dict[str, Any]) -> bool: ...

    async def delete(self, tutorial_id: str) -> bool: ...

    async def delete_all(self) -> int: ...

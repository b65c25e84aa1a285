"""MongoDB implementation of TutorialRepository."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from backend.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection

_WRITABLE_FIELDS = ("title", "description", "published")


def _object_id(tutorial_id: str) -> ObjectId | None:
    if not ObjectId.is_valid(tutorial_id):
        return None
    return ObjectId(tutorial_id)


class MongoTutorialRepository:
    def __init__(self, database: MongoConnection) -> None:
        self._database = database

    @property
    def _collection(self) -> AsyncIOMotorCollection:
        return self._database.tutorials_collection

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        document: dict[str, Any] = {
            "title": data["title"],
            "description": data.get("description"),
            "published": bool(data.get("published", False)),
            "createdAt": now,
            "updatedAt": now,
        }
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def find_all(self) -> list[dict[str, Any]]:
        return await self._collection.find({}).to_list(length=None)

    async def find_published(self) -> list[dict[str, Any]]:
        return await self._collection.find({"published": True}).to_list(length=None)

    async def find_by_id(self, tutorial_id: str) -> dict[str, Any] | None:
        oid = _object_id(tutorial_id)
        if oid is None:
            return None
        return await self._collection.find_one({"_id": oid})

    async def update(self, tutorial_id: str, changes: dict[str, Any]) -> bool:
        oid = _object_id(tutorial_id)
        if oid is None:
            return False
        fields = {k: v for k, v in changes.items() if k in _WRITABLE_FIELDS}
        fields["updatedAt"] = datetime.now(timezone.utc)
        result = await self._collection.update_one({"_id": oid}, {"$set": fields})
        return result.matched_count > 0

    async def delete(self, tutorial_id: str) -> bool:
        oid = _object_id(tutorial_id)
        if oid is None:
            return False
        result = await self._collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def delete_all(self) -> int:
        result = await self._collection.delete_many({})
        return int(result.deleted_count)

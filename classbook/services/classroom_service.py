"""
Classroom service for per-teacher classrooms.

Notes and activities are kept newest-first; groups are replaced wholesale.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from common.utils.exceptions import NotFoundException
from classbook.auth.services.credential_store import to_object_id

logger = logging.getLogger(__name__)

ENTRY_LISTS = ("notes", "activities")


def _dated_entry(data: dict) -> dict:
    entry = {"_id": ObjectId(), **data}
    if entry.get("date") is None:
        entry["date"] = datetime.now(timezone.utc)
    return entry


class ClassroomService:
    """
    Manages classroom documents.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize ClassroomService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._classrooms_collection = db["classrooms"]

    def _owned(self, user_id: str, classroom_id: str) -> dict:
        oid = to_object_id(classroom_id)
        if oid is None:
            raise NotFoundException(message="Classroom not found", code="CLASSROOM_NOT_FOUND")
        return {"_id": oid, "_userId": user_id}

    @staticmethod
    def _or_not_found(classroom: Optional[dict]) -> dict:
        if not classroom:
            raise NotFoundException(message="Classroom not found", code="CLASSROOM_NOT_FOUND")
        return classroom

    async def list_classrooms(self, user_id: str) -> List[dict]:
        """Get all classrooms owned by a user."""
        cursor = self._classrooms_collection.find({"_userId": user_id})
        return await cursor.to_list(length=None)

    async def create_classroom(self, user_id: str, data: dict) -> dict:
        """
        Create a classroom.

        Returns:
            Created classroom document
        """
        classroom = {
            "_userId": user_id,
            "name": data["name"],
            "grade": data["grade"],
            "year": data["year"],
            "created": datetime.now(timezone.utc),
            "notes": [_dated_entry(n) for n in data.get("notes", [])],
            "activities": [_dated_entry(a) for a in data.get("activities", [])],
            "groups": [],
        }
        result = await self._classrooms_collection.insert_one(classroom)
        classroom["_id"] = result.inserted_id
        logger.info(f"Classroom created: {result.inserted_id}")
        return classroom

    async def delete_classroom(self, user_id: str, classroom_id: str) -> dict:
        """
        Delete a classroom.

        Returns:
            The removed classroom document
        """
        classroom = await self._classrooms_collection.find_one_and_delete(
            self._owned(user_id, classroom_id)
        )
        return self._or_not_found(classroom)

    async def replace_groups(self, user_id: str, classroom_id: str, groups: List[dict]) -> dict:
        """Replace the classroom's student groups."""
        groups = [{"_id": ObjectId(), **group} for group in groups]
        classroom = await self._classrooms_collection.find_one_and_update(
            self._owned(user_id, classroom_id),
            {"$set": {"groups": groups}},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(classroom)

    async def add_entry(self, user_id: str, classroom_id: str, entry_list: str, data: dict) -> dict:
        """
        Prepend a note or activity.

        Args:
            entry_list: "notes" or "activities"
        """
        if entry_list not in ENTRY_LISTS:
            raise ValueError(f"Unknown entry list: {entry_list}")

        classroom = await self._classrooms_collection.find_one_and_update(
            self._owned(user_id, classroom_id),
            {"$push": {entry_list: {"$each": [_dated_entry(data)], "$position": 0}}},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(classroom)

    async def remove_entry(self, user_id: str, classroom_id: str, entry_list: str, item_id: str) -> dict:
        """Remove a note or activity by id."""
        if entry_list not in ENTRY_LISTS:
            raise ValueError(f"Unknown entry list: {entry_list}")

        query = self._owned(user_id, classroom_id)
        item_oid = to_object_id(item_id)
        if item_oid is None:
            return self._or_not_found(await self._classrooms_collection.find_one(query))

        classroom = await self._classrooms_collection.find_one_and_update(
            query,
            {"$pull": {entry_list: {"_id": item_oid}}},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(classroom)

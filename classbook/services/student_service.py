"""
Student service for per-teacher student records.

Every query is scoped by ``_userId`` so teachers only ever see their own
students. Embedded entries (contact details, absences, feedback) carry their
own ObjectId so they can be addressed individually.
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

DEFAULT_CONTACT_TYPES = ("email", "phone", "wechat")

# Top-level fields a generic update may set; embedded lists have their own operations
UPDATABLE_FIELDS = ("name", "gender", "classroom")

RECORD_LISTS = ("absences", "feedback")


def _entry(data: dict) -> dict:
    """Give an embedded entry its own id and a default date."""
    entry = {"_id": ObjectId(), **data}
    if entry.get("date") is None and "date" in data:
        entry["date"] = datetime.now(timezone.utc)
    return entry


class StudentService:
    """
    Manages student documents.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize StudentService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._students_collection = db["students"]

    def _owned(self, user_id: str, student_id: str) -> dict:
        oid = to_object_id(student_id)
        if oid is None:
            raise NotFoundException(message="Student not found", code="STUDENT_NOT_FOUND")
        return {"_id": oid, "_userId": user_id}

    @staticmethod
    def _or_not_found(student: Optional[dict]) -> dict:
        if not student:
            raise NotFoundException(message="Student not found", code="STUDENT_NOT_FOUND")
        return student

    def _build_student(self, user_id: str, data: dict) -> dict:
        return {
            "_userId": user_id,
            "name": data["name"],
            "gender": data.get("gender"),
            "classroom": data["classroom"],
            "contact_details": [
                _entry({"type": contact_type, "value": ""})
                for contact_type in DEFAULT_CONTACT_TYPES
            ],
            "absences": [_entry(a) for a in data.get("absences", [])],
            "feedback": [_entry(f) for f in data.get("feedback", [])],
        }

    async def list_students(self, user_id: str) -> List[dict]:
        """Get all students owned by a user."""
        cursor = self._students_collection.find({"_userId": user_id})
        return await cursor.to_list(length=None)

    async def get_student(self, user_id: str, student_id: str) -> dict:
        """
        Get one student.

        Raises:
            NotFoundException: No such student for this user
        """
        student = await self._students_collection.find_one(self._owned(user_id, student_id))
        return self._or_not_found(student)

    async def create_student(self, user_id: str, data: dict) -> dict:
        """
        Create a student with the three default contact detail slots.

        Args:
            user_id: Owner of the new record
            data: Validated student fields

        Returns:
            Created student document
        """
        student = self._build_student(user_id, data)
        result = await self._students_collection.insert_one(student)
        student["_id"] = result.inserted_id
        logger.info(f"Student created: {result.inserted_id}")
        return student

    async def create_students(self, user_id: str, items: List[dict]) -> List[dict]:
        """
        Create several students.

        Returns:
            The saved student documents, in input order
        """
        if not items:
            return []
        students = [self._build_student(user_id, data) for data in items]
        result = await self._students_collection.insert_many(students)
        for student, inserted_id in zip(students, result.inserted_ids):
            student["_id"] = inserted_id
        logger.info(f"Created {len(students)} students for user {user_id}")
        return students

    async def update_student(self, user_id: str, student_id: str, fields: dict) -> None:
        """
        Set top-level fields on a student.

        Raises:
            NotFoundException: No such student for this user
        """
        query = self._owned(user_id, student_id)
        updates = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}

        if not updates:
            self._or_not_found(await self._students_collection.find_one(query, {"_id": 1}))
            return

        result = await self._students_collection.update_one(query, {"$set": updates})
        if result.matched_count == 0:
            raise NotFoundException(message="Student not found", code="STUDENT_NOT_FOUND")

    async def delete_student(self, user_id: str, student_id: str) -> dict:
        """
        Delete a student.

        Returns:
            The removed student document
        """
        student = await self._students_collection.find_one_and_delete(
            self._owned(user_id, student_id)
        )
        return self._or_not_found(student)

    async def add_contact_detail(self, user_id: str, student_id: str, detail: dict) -> dict:
        """Append a contact detail and return the updated student."""
        student = await self._students_collection.find_one_and_update(
            self._owned(user_id, student_id),
            {"$push": {"contact_details": _entry(detail)}},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(student)

    async def update_contact_detail(
        self,
        user_id: str,
        student_id: str,
        item_id: str,
        value: str,
        detail_type: Optional[str] = None
    ) -> dict:
        """
        Set a contact detail's value.

        The type is only written when the existing entry has none.

        Raises:
            NotFoundException: No such student or contact detail
        """
        student = await self.get_student(user_id, student_id)
        item_oid = to_object_id(item_id)

        entry = next(
            (d for d in student.get("contact_details") or [] if isinstance(d, dict) and d.get("_id") == item_oid),
            None
        )
        if item_oid is None or entry is None:
            raise NotFoundException(message="Contact detail not found", code="CONTACT_DETAIL_NOT_FOUND")

        updates = {"contact_details.$.value": value}
        if not entry.get("type") and detail_type:
            updates["contact_details.$.type"] = detail_type

        query = {**self._owned(user_id, student_id), "contact_details._id": item_oid}
        updated = await self._students_collection.find_one_and_update(
            query,
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(updated)

    async def clear_contact_detail(self, user_id: str, student_id: str, item_id: str) -> dict:
        """Blank a contact detail's value, keeping the slot."""
        item_oid = to_object_id(item_id)
        if item_oid is None:
            raise NotFoundException(message="Contact detail not found", code="CONTACT_DETAIL_NOT_FOUND")

        query = {**self._owned(user_id, student_id), "contact_details._id": item_oid}
        student = await self._students_collection.find_one_and_update(
            query,
            {"$set": {"contact_details.$.value": ""}},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(student)

    async def add_record(self, user_id: str, student_id: str, record_list: str, data: dict) -> dict:
        """
        Prepend an absence or feedback entry.

        Args:
            record_list: "absences" or "feedback"
        """
        if record_list not in RECORD_LISTS:
            raise ValueError(f"Unknown record list: {record_list}")

        student = await self._students_collection.find_one_and_update(
            self._owned(user_id, student_id),
            {"$push": {record_list: {"$each": [_entry(data)], "$position": 0}}},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(student)

    async def remove_record(self, user_id: str, student_id: str, record_list: str, item_id: str) -> dict:
        """Remove an absence or feedback entry by id."""
        if record_list not in RECORD_LISTS:
            raise ValueError(f"Unknown record list: {record_list}")

        item_oid = to_object_id(item_id)
        if item_oid is None:
            # Nothing can match a malformed id; removal is a no-op
            return await self.get_student(user_id, student_id)

        student = await self._students_collection.find_one_and_update(
            self._owned(user_id, student_id),
            {"$pull": {record_list: {"_id": item_oid}}},
            return_document=ReturnDocument.AFTER,
        )
        return self._or_not_found(student)

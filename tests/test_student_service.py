"""Unit tests for StudentService (per-user scoping + embedded entries)."""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo import ReturnDocument

from common.utils.exceptions import NotFoundException
from classbook.services.student_service import StudentService, DEFAULT_CONTACT_TYPES


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def service(mock_db):
    return StudentService(mock_db)


@pytest.fixture
def student_id():
    return str(ObjectId())


@pytest.fixture
def student_data():
    return {
        "name": "Ana",
        "gender": "f",
        "classroom": {"_id": str(ObjectId()), "name": "3B"},
        "absences": [{"date": None, "type": "sick", "comment": "flu"}],
        "feedback": [],
    }


# ─────────────────────────────────────────────────────────────────
# Reads
# ─────────────────────────────────────────────────────────────────


class TestReads:
    @pytest.mark.asyncio
    async def test_list_is_scoped_to_user(self, service, mock_collection, sample_user_id):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[])
        mock_collection.find.return_value = cursor

        assert await service.list_students(sample_user_id) == []
        mock_collection.find.assert_called_once_with({"_userId": sample_user_id})

    @pytest.mark.asyncio
    async def test_get_scoped_to_user(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.find_one.return_value = {"_id": ObjectId(student_id), "name": "Ana"}

        student = await service.get_student(sample_user_id, student_id)

        assert student["name"] == "Ana"
        mock_collection.find_one.assert_called_once_with({"_id": ObjectId(student_id), "_userId": sample_user_id})

    @pytest.mark.asyncio
    async def test_get_other_users_student_is_not_found(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.find_one.return_value = None

        with pytest.raises(NotFoundException):
            await service.get_student(sample_user_id, student_id)

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, service, mock_collection, sample_user_id):
        with pytest.raises(NotFoundException):
            await service.get_student(sample_user_id, "nope")
        mock_collection.find_one.assert_not_called()


# ─────────────────────────────────────────────────────────────────
# Writes
# ─────────────────────────────────────────────────────────────────


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_adds_default_contact_slots(self, service, mock_collection, sample_user_id, student_data):
        new_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=new_id)

        student = await service.create_student(sample_user_id, student_data)

        assert student["_id"] == new_id
        assert student["_userId"] == sample_user_id
        assert [d["type"] for d in student["contact_details"]] == list(DEFAULT_CONTACT_TYPES)
        assert all(d["value"] == "" for d in student["contact_details"])

    @pytest.mark.asyncio
    async def test_create_gives_entries_ids_and_dates(self, service, mock_collection, sample_user_id, student_data):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        student = await service.create_student(sample_user_id, student_data)

        absence = student["absences"][0]
        assert isinstance(absence["_id"], ObjectId)
        assert isinstance(absence["date"], datetime)

    @pytest.mark.asyncio
    async def test_create_many(self, service, mock_collection, sample_user_id, student_data):
        ids = [ObjectId(), ObjectId()]
        mock_collection.insert_many.return_value = MagicMock(inserted_ids=ids)

        students = await service.create_students(sample_user_id, [student_data, {**student_data, "name": "Ben"}])

        assert [s["_id"] for s in students] == ids
        assert [s["name"] for s in students] == ["Ana", "Ben"]

    @pytest.mark.asyncio
    async def test_create_many_empty(self, service, mock_collection, sample_user_id):
        assert await service.create_students(sample_user_id, []) == []
        mock_collection.insert_many.assert_not_called()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_only_sets_top_level_fields(self, service, mock_collection, sample_user_id, student_id):
        await service.update_student(sample_user_id, student_id, {
            "name": "Ana B",
            "_userId": "someone-else",
            "contact_details": "garbage",
            "$where": "1",
        })

        _, update = mock_collection.update_one.call_args[0]
        assert update == {"$set": {"name": "Ana B"}}

    @pytest.mark.asyncio
    async def test_update_missing_student(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.update_one.return_value = MagicMock(matched_count=0)

        with pytest.raises(NotFoundException):
            await service.update_student(sample_user_id, student_id, {"name": "x"})

    @pytest.mark.asyncio
    async def test_delete_returns_removed(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.find_one_and_delete.return_value = {"_id": ObjectId(student_id), "name": "Ana"}

        removed = await service.delete_student(sample_user_id, student_id)

        assert removed["name"] == "Ana"


class TestContactDetails:
    @pytest.mark.asyncio
    async def test_add_pushes_entry(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.find_one_and_update.return_value = {"_id": ObjectId(student_id)}

        await service.add_contact_detail(sample_user_id, student_id, {"type": "fax", "value": "123"})

        _, update = mock_collection.find_one_and_update.call_args[0]
        pushed = update["$push"]["contact_details"]
        assert pushed["type"] == "fax"
        assert isinstance(pushed["_id"], ObjectId)
        assert mock_collection.find_one_and_update.call_args[1]["return_document"] == ReturnDocument.AFTER

    @pytest.mark.asyncio
    async def test_update_sets_value_and_keeps_existing_type(self, service, mock_collection, sample_user_id, student_id):
        item_id = ObjectId()
        mock_collection.find_one.return_value = {
            "_id": ObjectId(student_id),
            "contact_details": [{"_id": item_id, "type": "email", "value": ""}],
        }
        mock_collection.find_one_and_update.return_value = {"_id": ObjectId(student_id)}

        await service.update_contact_detail(sample_user_id, student_id, str(item_id), value="a@b.c", detail_type="phone")

        query, update = mock_collection.find_one_and_update.call_args[0]
        assert query["contact_details._id"] == item_id
        assert update == {"$set": {"contact_details.$.value": "a@b.c"}}

    @pytest.mark.asyncio
    async def test_update_fills_missing_type(self, service, mock_collection, sample_user_id, student_id):
        item_id = ObjectId()
        mock_collection.find_one.return_value = {
            "_id": ObjectId(student_id),
            "contact_details": [{"_id": item_id, "value": ""}],
        }
        mock_collection.find_one_and_update.return_value = {"_id": ObjectId(student_id)}

        await service.update_contact_detail(sample_user_id, student_id, str(item_id), value="x", detail_type="phone")

        _, update = mock_collection.find_one_and_update.call_args[0]
        assert update["$set"]["contact_details.$.type"] == "phone"

    @pytest.mark.asyncio
    async def test_update_unknown_detail(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.find_one.return_value = {"_id": ObjectId(student_id), "contact_details": []}

        with pytest.raises(NotFoundException):
            await service.update_contact_detail(sample_user_id, student_id, str(ObjectId()), value="x")

    @pytest.mark.asyncio
    async def test_clear_blanks_value(self, service, mock_collection, sample_user_id, student_id):
        item_id = ObjectId()
        mock_collection.find_one_and_update.return_value = {"_id": ObjectId(student_id)}

        await service.clear_contact_detail(sample_user_id, student_id, str(item_id))

        _, update = mock_collection.find_one_and_update.call_args[0]
        assert update == {"$set": {"contact_details.$.value": ""}}


class TestRecords:
    @pytest.mark.asyncio
    async def test_add_prepends(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.find_one_and_update.return_value = {"_id": ObjectId(student_id)}

        await service.add_record(sample_user_id, student_id, "feedback", {"date": None, "type": "praise", "comment": "ok"})

        _, update = mock_collection.find_one_and_update.call_args[0]
        assert update["$push"]["feedback"]["$position"] == 0
        assert update["$push"]["feedback"]["$each"][0]["comment"] == "ok"

    @pytest.mark.asyncio
    async def test_remove_pulls_by_id(self, service, mock_collection, sample_user_id, student_id):
        item_id = ObjectId()
        mock_collection.find_one_and_update.return_value = {"_id": ObjectId(student_id)}

        await service.remove_record(sample_user_id, student_id, "absences", str(item_id))

        _, update = mock_collection.find_one_and_update.call_args[0]
        assert update == {"$pull": {"absences": {"_id": item_id}}}

    @pytest.mark.asyncio
    async def test_unknown_list_rejected(self, service, sample_user_id, student_id):
        with pytest.raises(ValueError):
            await service.add_record(sample_user_id, student_id, "grades", {})

    @pytest.mark.asyncio
    async def test_update_contact_detail_skips_malformed_entries(self, service, mock_collection, sample_user_id, student_id):
        mock_collection.find_one.return_value = {"_id": ObjectId(student_id), "contact_details": "garbage"}

        with pytest.raises(NotFoundException):
            await service.update_contact_detail(sample_user_id, student_id, str(ObjectId()), value="x")

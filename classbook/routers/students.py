"""
FastAPI router for student records.

All endpoints require an access token and only touch the caller's students.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends

from common.auth.base import AuthContext
from common.utils import serialize_document
from classbook.schemas.students import (
    StudentCreateRequest,
    ContactDetailInput,
    RecordEntryInput,
    StudentUpdateRequest,
)
from classbook.services.student_service import StudentService
from classbook.dependencies import get_student_service, require_access_token

router = APIRouter(prefix="/students", tags=["students"])

Auth = Annotated[AuthContext, Depends(require_access_token)]
Students = Annotated[StudentService, Depends(get_student_service)]


@router.get("")
async def list_students(auth: Auth, service: Students):
    """Get all students."""
    return serialize_document(await service.list_students(auth.user_id))


@router.get("/{student_id}")
async def get_student(student_id: str, auth: Auth, service: Students):
    """Get a single student."""
    return serialize_document(await service.get_student(auth.user_id, student_id))


@router.post("/add")
async def create_student(body: StudentCreateRequest, auth: Auth, service: Students):
    """Create a student."""
    student = await service.create_student(auth.user_id, body.model_dump())
    return serialize_document(student)


@router.post("/add/many")
async def create_students(body: List[StudentCreateRequest], auth: Auth, service: Students):
    """Create several students at once."""
    students = await service.create_students(
        auth.user_id,
        [item.model_dump() for item in body],
    )
    return serialize_document(students)


@router.post("/{student_id}/contact-details")
async def add_contact_detail(
    student_id: str,
    body: ContactDetailInput,
    auth: Auth,
    service: Students,
):
    """Add a contact detail."""
    student = await service.add_contact_detail(auth.user_id, student_id, body.model_dump())
    return serialize_document(student)


@router.patch("/{student_id}")
async def update_student(
    student_id: str,
    body: StudentUpdateRequest,
    auth: Auth,
    service: Students,
):
    """Update a student's name, gender or classroom."""
    await service.update_student(auth.user_id, student_id, body.model_dump(exclude_unset=True))
    return {"message": "updated successfully"}


@router.patch("/{student_id}/contact-details/{item_id}")
async def update_contact_detail(
    student_id: str,
    item_id: str,
    body: ContactDetailInput,
    auth: Auth,
    service: Students,
):
    """Set a contact detail's value."""
    student = await service.update_contact_detail(
        auth.user_id,
        student_id,
        item_id,
        value=body.value,
        detail_type=body.type,
    )
    return serialize_document(student)


@router.patch("/{student_id}/absences")
async def add_absence(student_id: str, body: RecordEntryInput, auth: Auth, service: Students):
    """Record an absence (newest first)."""
    student = await service.add_record(auth.user_id, student_id, "absences", body.model_dump())
    return serialize_document(student)


@router.patch("/{student_id}/feedback")
async def add_feedback(student_id: str, body: RecordEntryInput, auth: Auth, service: Students):
    """Record feedback (newest first)."""
    student = await service.add_record(auth.user_id, student_id, "feedback", body.model_dump())
    return serialize_document(student)


@router.delete("/{student_id}")
async def delete_student(student_id: str, auth: Auth, service: Students):
    """Delete a student."""
    removed = await service.delete_student(auth.user_id, student_id)
    return {
        "message": "student deleted successfully",
        "removedStudent": serialize_document(removed),
    }


@router.delete("/{student_id}/contact-details/{item_id}")
async def clear_contact_detail(student_id: str, item_id: str, auth: Auth, service: Students):
    """Blank a contact detail."""
    student = await service.clear_contact_detail(auth.user_id, student_id, item_id)
    return serialize_document(student)


@router.delete("/{student_id}/absences/{item_id}")
async def remove_absence(student_id: str, item_id: str, auth: Auth, service: Students):
    """Delete an absence."""
    student = await service.remove_record(auth.user_id, student_id, "absences", item_id)
    return serialize_document(student)


@router.delete("/{student_id}/feedback/{item_id}")
async def remove_feedback(student_id: str, item_id: str, auth: Auth, service: Students):
    """Delete a feedback entry."""
    student = await service.remove_record(auth.user_id, student_id, "feedback", item_id)
    return serialize_document(student)

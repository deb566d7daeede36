"""
FastAPI router for classrooms.

All endpoints require an access token and only touch the caller's classrooms.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends

from common.auth.base import AuthContext
from common.utils import serialize_document
from classbook.schemas.classrooms import (
    ClassroomCreateRequest,
    NoteInput,
    ActivityInput,
    GroupInput,
)
from classbook.services.classroom_service import ClassroomService
from classbook.dependencies import get_classroom_service, require_access_token

router = APIRouter(prefix="/classrooms", tags=["classrooms"])

Auth = Annotated[AuthContext, Depends(require_access_token)]
Classrooms = Annotated[ClassroomService, Depends(get_classroom_service)]


@router.get("")
async def list_classrooms(auth: Auth, service: Classrooms):
    """Get all classrooms."""
    return serialize_document(await service.list_classrooms(auth.user_id))


@router.post("")
async def create_classroom(body: ClassroomCreateRequest, auth: Auth, service: Classrooms):
    """Create a classroom."""
    classroom = await service.create_classroom(auth.user_id, body.model_dump())
    return serialize_document(classroom)


@router.patch("/{classroom_id}/groups")
async def replace_groups(
    classroom_id: str,
    body: List[GroupInput],
    auth: Auth,
    service: Classrooms,
):
    """Replace the classroom's student groups."""
    groups = [group.model_dump(by_alias=True) for group in body]
    classroom = await service.replace_groups(auth.user_id, classroom_id, groups)
    return serialize_document(classroom)


@router.patch("/{classroom_id}/notes")
async def add_note(classroom_id: str, body: NoteInput, auth: Auth, service: Classrooms):
    """Add a note (newest first)."""
    classroom = await service.add_entry(auth.user_id, classroom_id, "notes", body.model_dump())
    return serialize_document(classroom)


@router.patch("/{classroom_id}/activities")
async def add_activity(classroom_id: str, body: ActivityInput, auth: Auth, service: Classrooms):
    """Add an activity (newest first)."""
    classroom = await service.add_entry(auth.user_id, classroom_id, "activities", body.model_dump())
    return serialize_document(classroom)


@router.delete("/{classroom_id}")
async def delete_classroom(classroom_id: str, auth: Auth, service: Classrooms):
    """Delete a classroom."""
    removed = await service.delete_classroom(auth.user_id, classroom_id)
    return {
        "message": "classroom deleted successfully",
        "removedClassroom": serialize_document(removed),
    }


@router.delete("/{classroom_id}/notes/{item_id}")
async def remove_note(classroom_id: str, item_id: str, auth: Auth, service: Classrooms):
    """Delete a note."""
    classroom = await service.remove_entry(auth.user_id, classroom_id, "notes", item_id)
    return serialize_document(classroom)


@router.delete("/{classroom_id}/activities/{item_id}")
async def remove_activity(classroom_id: str, item_id: str, auth: Auth, service: Classrooms):
    """Delete an activity."""
    classroom = await service.remove_entry(auth.user_id, classroom_id, "activities", item_id)
    return serialize_document(classroom)

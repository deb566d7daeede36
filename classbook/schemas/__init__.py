"""
Classbook request/response schemas.
"""

from classbook.schemas.auth import (
    SignupRequest,
    LoginRequest,
    UpdatePasswordRequest,
    AccessTokenResponse,
    MessageResponse,
)
from classbook.schemas.students import (
    StudentCreateRequest,
    RecordEntryInput,
    ContactDetailInput,
    StudentUpdateRequest,
)
from classbook.schemas.classrooms import (
    ClassroomCreateRequest,
    NoteInput,
    ActivityInput,
    GroupInput,
)

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UpdatePasswordRequest",
    "AccessTokenResponse",
    "MessageResponse",
    "StudentCreateRequest",
    "RecordEntryInput",
    "ContactDetailInput",
    "StudentUpdateRequest",
    "ClassroomCreateRequest",
    "NoteInput",
    "ActivityInput",
    "GroupInput",
]

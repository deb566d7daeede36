"""
Pydantic models for student record request validation.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, field_validator


class RecordEntryInput(BaseModel):
    """An absence or feedback entry."""
    date: Optional[datetime] = None
    type: str
    comment: str


class StudentCreateRequest(BaseModel):
    """Request body for creating a student."""
    name: str = Field(..., min_length=1)
    gender: Optional[str] = None
    classroom: Dict[str, Any]
    absences: List[RecordEntryInput] = Field(default_factory=list)
    feedback: List[RecordEntryInput] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ContactDetailInput(BaseModel):
    """Contact detail to add to a student."""
    type: Optional[str] = None
    value: str = ""


class StudentUpdateRequest(BaseModel):
    """
    Request body for updating a student's top-level fields.

    Embedded lists (contact details, absences, feedback) have their own
    routes and cannot be replaced here. Unknown fields are ignored.
    """
    name: Optional[str] = None
    gender: Optional[str] = None
    classroom: Optional[Dict[str, Any]] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("name must not be blank")
        return value.strip()

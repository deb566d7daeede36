"""
Pydantic models for classroom request validation.
"""

from datetime import datetime
from typing import Optional, List, Any
from pydantic import BaseModel, Field, field_validator


class NoteInput(BaseModel):
    """Classroom note."""
    date: Optional[datetime] = None
    title: str
    content: str


class ActivityInput(BaseModel):
    """Lesson activity."""
    date: Optional[datetime] = None
    type: Optional[str] = None
    focus: Optional[str] = None
    aim: Optional[str] = None
    preparation: str
    level: Optional[str] = None
    time: Optional[str] = None
    introduction: str
    procedure: List[Any]


class GroupMember(BaseModel):
    """Student reference inside a group."""
    id: str = Field(..., alias="_id")
    name: str


class GroupInput(BaseModel):
    """Student group inside a classroom."""
    name: str
    color: str
    students: List[GroupMember] = Field(default_factory=list)


class ClassroomCreateRequest(BaseModel):
    """Request body for creating a classroom."""
    name: str = Field(..., min_length=1)
    grade: int
    year: int
    notes: List[NoteInput] = Field(default_factory=list)
    activities: List[ActivityInput] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

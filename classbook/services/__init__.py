"""Resource services for students and classrooms."""

from classbook.services.student_service import StudentService
from classbook.services.classroom_service import ClassroomService

__all__ = [
    "StudentService",
    "ClassroomService",
]

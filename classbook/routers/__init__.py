"""
Classbook API Routers.

All routers are imported here for easy access.
"""

from classbook.routers.users import router as users_router
from classbook.routers.students import router as students_router
from classbook.routers.classrooms import router as classrooms_router

__all__ = [
    "users_router",
    "students_router",
    "classrooms_router",
]

"""
Catalog module interface.
"""

from typing import Protocol, runtime_checkable

from .models import Course


@runtime_checkable
class ICatalogService(Protocol):
    """
    Interface for the course catalog.
    """

    def list_courses(self) -> list[Course]:
        """All courses, in catalog order."""
        ...

    def featured_courses(self) -> list[Course]:
        """The courses shown in the featured strip."""
        ...

    def get_course(self, course_id: str) -> Course:
        """
        Raises:
            CourseNotFoundError: If the ID is unknown
        """
        ...

    def enroll(self, user_id: str, course_id: str) -> None:
        """
        Enroll a user in a course.

        No course is open for enrollment yet.

        Raises:
            CourseNotFoundError: If the ID is unknown
            CourseUnavailableError: If the course is not open
        """
        ...

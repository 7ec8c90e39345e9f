"""
Catalog service implementation.

The catalog is static; nothing here touches the database.
"""

import logging
from typing import Optional, Sequence

from .exceptions import CourseNotFoundError, CourseUnavailableError
from .interfaces import ICatalogService
from .models import COURSES, FEATURED_COUNT, Course

logger = logging.getLogger(__name__)


class CatalogService(ICatalogService):
    """Course catalog over a fixed list."""

    def __init__(self, courses: Sequence[Course] = COURSES, featured_count: int = FEATURED_COUNT):
        self._courses = list(courses)
        self._featured_count = featured_count

    def list_courses(self) -> list[Course]:
        return list(self._courses)

    def featured_courses(self) -> list[Course]:
        return self._courses[: self._featured_count]

    def get_course(self, course_id: str) -> Course:
        for course in self._courses:
            if course.id == course_id:
                return course
        raise CourseNotFoundError(course_id)

    def enroll(self, user_id: str, course_id: str) -> None:
        course = self.get_course(course_id)
        logger.info(f"Enrollment requested by {user_id} for unavailable course {course.id}")
        raise CourseUnavailableError(course.id, course.title)


# Module-level instance getter
_service_instance: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """Get the catalog service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = CatalogService()
    return _service_instance


def reset_catalog_service() -> None:
    """Reset the catalog service singleton (for testing)."""
    global _service_instance
    _service_instance = None

"""
Catalog module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class CourseNotFoundError(NotFoundError):
    """Raised when a course ID is not in the catalog."""

    def __init__(self, course_id: str):
        super().__init__(
            f"Course not found: {course_id}",
            code="COURSE_NOT_FOUND",
            details={"course_id": course_id},
        )


class CourseUnavailableError(ConflictError):
    """Raised when enrolling in a course that is not open yet."""

    def __init__(self, course_id: str, title: str):
        super().__init__(
            "This course is coming soon. You will be notified when it becomes available.",
            code="COURSE_UNAVAILABLE",
            details={"course_id": course_id, "title": title},
        )

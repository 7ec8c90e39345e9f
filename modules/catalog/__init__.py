"""
Catalog module.

Static course offerings for the learning section.
"""

from .interfaces import ICatalogService
from .models import Course, CourseLevel, CourseListResponse, COURSES, FEATURED_COUNT
from .exceptions import CourseNotFoundError, CourseUnavailableError

__all__ = [
    "ICatalogService",
    "Course",
    "CourseLevel",
    "CourseListResponse",
    "COURSES",
    "FEATURED_COUNT",
    "CourseNotFoundError",
    "CourseUnavailableError",
]

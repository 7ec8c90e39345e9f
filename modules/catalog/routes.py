"""
Course catalog endpoints.

The catalog is public; enrollment needs a signed-in user.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_catalog_service
from shared.models import AuthenticatedUser

from .interfaces import ICatalogService
from .models import Course, CourseListResponse

router = APIRouter()


@router.get("", response_model=CourseListResponse)
async def list_courses(
    service: ICatalogService = Depends(get_catalog_service),
) -> CourseListResponse:
    """List all courses."""
    courses = service.list_courses()
    return CourseListResponse(courses=courses, total=len(courses))


@router.get("/featured", response_model=CourseListResponse)
async def featured_courses(
    service: ICatalogService = Depends(get_catalog_service),
) -> CourseListResponse:
    """List the featured courses."""
    courses = service.featured_courses()
    return CourseListResponse(courses=courses, total=len(courses))


@router.get("/{course_id}", response_model=Course)
async def get_course(
    course_id: str,
    service: ICatalogService = Depends(get_catalog_service),
) -> Course:
    """Get a single course."""
    return service.get_course(course_id)


@router.post("/{course_id}/enroll", status_code=204)
async def enroll(
    course_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICatalogService = Depends(get_catalog_service),
) -> None:
    """
    Enroll in a course.

    Every course is currently "coming soon", so this answers 409.
    """
    service.enroll(user.id, course_id)

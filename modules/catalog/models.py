"""
Catalog module data models.
"""

from enum import Enum
from pydantic import BaseModel, Field


class CourseLevel(str, Enum):
    """Course difficulty."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Course(BaseModel):
    """A course offering."""

    id: str
    title: str
    description: str
    level: CourseLevel
    duration: str = Field(..., description="Human-readable length, e.g. '4 weeks'")
    image: str = Field(..., description="Image asset file name")
    topics: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class CourseListResponse(BaseModel):
    """Response containing courses."""

    courses: list[Course]
    total: int


# Number of courses shown in the featured strip
FEATURED_COUNT = 2

COURSES: tuple[Course, ...] = (
    Course(
        id="1",
        title="JavaScript Fundamentals",
        description="Learn the core concepts of JavaScript programming",
        level=CourseLevel.BEGINNER,
        duration="4 weeks",
        image="javascript.png",
        topics=["Variables & Data Types", "Functions", "DOM Manipulation", "ES6+ Features"],
    ),
    Course(
        id="2",
        title="React Native Development",
        description="Build cross-platform mobile apps with React Native",
        level=CourseLevel.INTERMEDIATE,
        duration="6 weeks",
        image="react.png",
        topics=["Component Design", "Navigation", "State Management", "API Integration"],
    ),
    Course(
        id="3",
        title="Advanced Node.js",
        description="Master server-side JavaScript with Node.js",
        level=CourseLevel.ADVANCED,
        duration="8 weeks",
        image="nodejs.png",
        topics=["Express Framework", "RESTful APIs", "Authentication", "Database Integration"],
    ),
    Course(
        id="4",
        title="UI/UX Design Principles",
        description="Learn to create engaging and user-friendly interfaces",
        level=CourseLevel.BEGINNER,
        duration="5 weeks",
        image="ui-ux.png",
        topics=["Design Thinking", "Wireframing", "Prototyping", "User Testing"],
    ),
)

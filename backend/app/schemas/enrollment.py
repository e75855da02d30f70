from pydantic import Field, field_validator

from app.schemas.common import ApiModel, UtcDatetime
from app.schemas.course import CourseOut


class EnrollmentCreate(ApiModel):
    course_id: str = Field(min_length=1, max_length=36)
    semester: str = Field(min_length=1, max_length=50)

    @field_validator("semester")
    @classmethod
    def normalize_semester(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Semester is required")
        return trimmed


class EnrollmentOut(ApiModel):
    id: str
    user_id: str
    course_id: str
    semester: str
    course: CourseOut | None = None
    created_at: UtcDatetime | None = None

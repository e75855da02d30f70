from pydantic import Field

from app.schemas.common import ApiModel
from app.schemas.course import CourseOut
from app.schemas.study_resource import StudyResourceOut


class RecommendationCreate(ApiModel):
    user_id: str = Field(min_length=1, max_length=36)
    course_id: str = Field(min_length=1, max_length=36)
    resource_id: str = Field(min_length=1, max_length=36)
    reason: str | None = Field(default=None, max_length=1000)
    priority: int = 0


class RecommendationComplete(ApiModel):
    completed: bool = True


class RecommendationOut(ApiModel):
    id: str
    user_id: str
    course_id: str
    resource_id: str
    reason: str
    priority: int
    completed: bool
    course: CourseOut | None = None
    resource: StudyResourceOut | None = None

from pydantic import Field

from app.models.study_resource import ResourceType
from app.schemas.common import ApiModel
from app.schemas.course import CourseOut


class StudyResourceBase(ApiModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    url: str = Field(min_length=1, max_length=2048)
    type: ResourceType
    course_id: str = Field(min_length=1, max_length=36)


class StudyResourceCreate(StudyResourceBase):
    pass


class StudyResourceUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    url: str | None = Field(default=None, min_length=1, max_length=2048)
    type: ResourceType | None = None
    course_id: str | None = Field(default=None, min_length=1, max_length=36)


class StudyResourceOut(StudyResourceBase):
    id: str
    course: CourseOut | None = None

from pydantic import Field

from app.models.exam import ExamStatus
from app.schemas.common import ApiModel, UtcDatetime
from app.schemas.course import CourseOut
from app.schemas.room import RoomOut


class ExamCreate(ApiModel):
    course_id: str = Field(min_length=1, max_length=36)
    start_time: UtcDatetime
    end_time: UtcDatetime
    room_id: str | None = Field(default=None, max_length=36)
    status: ExamStatus = ExamStatus.SCHEDULED


class ExamUpdate(ApiModel):
    course_id: str | None = Field(default=None, min_length=1, max_length=36)
    start_time: UtcDatetime | None = None
    end_time: UtcDatetime | None = None
    room_id: str | None = Field(default=None, max_length=36)
    status: ExamStatus | None = None


class ExamOut(ApiModel):
    id: str
    course_id: str
    room_id: str | None = None
    start_time: UtcDatetime
    end_time: UtcDatetime
    status: ExamStatus
    course: CourseOut | None = None
    room: RoomOut | None = None

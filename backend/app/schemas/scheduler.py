from datetime import date

from pydantic import Field

from app.models.exam import ExamStatus
from app.schemas.common import ApiModel, UtcDatetime
from app.schemas.exam import ExamOut


class ExamDraftIn(ApiModel):
    course_id: str | None = Field(default=None, max_length=36)
    room_id: str | None = Field(default=None, max_length=36)
    start_time: UtcDatetime
    end_time: UtcDatetime
    status: ExamStatus = ExamStatus.SCHEDULED


class SchedulerSaveIn(ExamDraftIn):
    confirm_conflicts: bool = False


class RescheduleIn(ApiModel):
    day: date
    slot_index: int = Field(ge=0, le=95)
    confirm_conflicts: bool = False


class ConflictCheckOut(ApiModel):
    has_conflicts: bool
    conflicts: list[ExamOut]
    message: str | None = None


class SchedulerSaveOut(ApiModel):
    saved: bool
    requires_confirmation: bool = False
    exam: ExamOut | None = None
    conflicts: list[ExamOut] = Field(default_factory=list)

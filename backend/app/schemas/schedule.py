from datetime import date
from typing import Literal

from app.schemas.common import ApiModel
from app.schemas.exam import ExamOut


class ScheduledExamOut(ExamOut):
    has_conflict: bool = False
    timing: Literal["today", "upcoming", "past"]


class ScheduleDayOut(ApiModel):
    day: date
    exams: list[ScheduledExamOut]


class ConflictPairOut(ApiModel):
    exam_a: ExamOut
    exam_b: ExamOut


class CountdownOut(ApiModel):
    days: int
    hours: int
    minutes: int
    seconds: int


class NextExamOut(ApiModel):
    exam: ExamOut
    countdown: CountdownOut


class ScheduleOut(ApiModel):
    days: list[ScheduleDayOut]
    has_conflicts: bool
    conflicts: list[ConflictPairOut]
    next_exam: NextExamOut | None = None

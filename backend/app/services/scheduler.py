"""Admin exam scheduling: validation, room-conflict gating and drag rescheduling."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta, tzinfo

from app.core.clock import as_utc, schedule_zone
from app.core.config import Settings, get_settings
from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.models.exam import Exam, ExamStatus
from app.repositories import Repositories
from app.services.conflict_service import find_room_conflicts

logger = logging.getLogger(__name__)

REQUIRED_DRAFT_FIELDS = {
    "course_id": "Course is required",
    "start_time": "Start time is required",
    "end_time": "End time is required",
    "status": "Status is required",
}

ConfirmConflicts = Callable[[list[Exam]], bool]
OnSaved = Callable[[Exam], None]


@dataclass(frozen=True)
class SchedulingGrid:
    start_hour: int = 8
    slot_minutes: int = 30
    default_duration_minutes: int = 120

    @classmethod
    def from_settings(cls, settings: Settings) -> "SchedulingGrid":
        return cls(
            start_hour=settings.scheduler_grid_start_hour,
            slot_minutes=settings.scheduler_slot_minutes,
            default_duration_minutes=settings.scheduler_default_exam_minutes,
        )


@dataclass
class ExamDraft:
    start_time: datetime
    end_time: datetime
    course_id: str | None = None
    room_id: str | None = None
    status: ExamStatus = ExamStatus.SCHEDULED
    id: str | None = None

    @classmethod
    def from_exam(cls, exam: Exam) -> "ExamDraft":
        return cls(
            id=exam.id,
            course_id=exam.course_id,
            room_id=exam.room_id,
            start_time=as_utc(exam.start_time),
            end_time=as_utc(exam.end_time),
            status=exam.status,
        )

    def merged(self, changes: dict) -> "ExamDraft":
        """Apply a partial update. An explicit ``None`` clears ``room_id``; other fields cannot be cleared."""
        for key, message in REQUIRED_DRAFT_FIELDS.items():
            if key in changes and changes[key] is None:
                raise ValidationError(message)
        return replace(self, **changes)

    def values(self) -> dict:
        return {
            "course_id": self.course_id,
            "room_id": self.room_id,
            "start_time": as_utc(self.start_time),
            "end_time": as_utc(self.end_time),
            "status": self.status,
        }


@dataclass
class SaveOutcome:
    saved: bool
    exam: Exam | None = None
    conflicts: list[Exam] = field(default_factory=list)

    @property
    def requires_confirmation(self) -> bool:
        return not self.saved and bool(self.conflicts)


def conflict_warning(count: int) -> str:
    return f"There are scheduling conflicts with {count} existing exams in this room. Continue anyway?"


def compute_drop_window(
    start_time: datetime,
    end_time: datetime,
    target_day: date,
    slot_index: int,
    *,
    grid: SchedulingGrid,
    zone: tzinfo,
) -> tuple[datetime, datetime]:
    """New window for an exam dropped on ``target_day`` at ``slot_index``.

    Moving to another day keeps the time of day and the duration. Dropping
    within the same day snaps to the slot grid and applies the grid's default
    duration, whatever the exam lasted before.
    """
    local_start = as_utc(start_time).astimezone(zone)
    if target_day != local_start.date():
        duration = as_utc(end_time) - as_utc(start_time)
        new_start = datetime.combine(target_day, local_start.time(), tzinfo=zone)
        return as_utc(new_start), as_utc(new_start) + duration

    origin = datetime.combine(target_day, time(hour=grid.start_hour), tzinfo=zone)
    new_start = as_utc(origin) + timedelta(minutes=slot_index * grid.slot_minutes)
    return new_start, new_start + timedelta(minutes=grid.default_duration_minutes)


class ExamScheduler:
    def __init__(
        self,
        repos: Repositories,
        *,
        grid: SchedulingGrid | None = None,
        zone: tzinfo | None = None,
    ) -> None:
        self.repos = repos
        self.grid = grid or SchedulingGrid.from_settings(get_settings())
        self.zone = zone or schedule_zone()

    def get_exam(self, exam_id: str) -> Exam:
        exam = self.repos.exams.get(exam_id)
        if exam is None:
            raise ResourceNotFoundError("Exam", message="Exam not found")
        return exam

    def validate(self, draft: ExamDraft, *, require_room: bool = True) -> None:
        if not draft.course_id:
            raise ValidationError("Course is required")
        if require_room and not draft.room_id:
            raise ValidationError("Room is required")
        if not as_utc(draft.start_time) < as_utc(draft.end_time):
            raise ValidationError("Start time must be before end time")
        if self.repos.courses.get(draft.course_id) is None:
            raise ResourceNotFoundError("Course", message="Course not found")
        if draft.room_id and self.repos.rooms.get(draft.room_id) is None:
            raise ResourceNotFoundError("Room", message="Room not found")

    def find_conflicts(self, draft: ExamDraft, *, exclude_id: str | None = None) -> list[Exam]:
        if not draft.room_id:
            return []
        return find_room_conflicts(draft, self.repos.exams.list_in_room(draft.room_id), exclude_id=exclude_id)

    def save(
        self,
        draft: ExamDraft,
        *,
        exam_id: str | None = None,
        require_room: bool = True,
        check_conflicts: bool = True,
        confirm: ConfirmConflicts | None = None,
        on_saved: OnSaved | None = None,
    ) -> SaveOutcome:
        existing = self.get_exam(exam_id) if exam_id is not None else None
        self.validate(draft, require_room=require_room)

        conflicts: list[Exam] = []
        if check_conflicts:
            conflicts = self.find_conflicts(draft, exclude_id=exam_id)
            if conflicts:
                if confirm is None or not confirm(conflicts):
                    logger.info(
                        "Exam save held for confirmation: %d room conflict(s) in room %s",
                        len(conflicts),
                        draft.room_id,
                    )
                    return SaveOutcome(saved=False, conflicts=conflicts)
                logger.warning(
                    "Saving exam despite %d confirmed room conflict(s) in room %s",
                    len(conflicts),
                    draft.room_id,
                )

        values = draft.values()
        if existing is None:
            exam = self.repos.exams.add(Exam(**values))
            logger.info("Created exam %s for course %s", exam.id, exam.course_id)
        else:
            exam = self.repos.exams.update(existing, values)
            logger.info("Updated exam %s", exam.id)

        if on_saved is not None:
            on_saved(exam)
        return SaveOutcome(saved=True, exam=exam, conflicts=conflicts)

    def reschedule(
        self,
        exam_id: str,
        target_day: date,
        slot_index: int,
        *,
        confirm: ConfirmConflicts | None = None,
        on_saved: OnSaved | None = None,
    ) -> SaveOutcome:
        exam = self.get_exam(exam_id)
        start_time, end_time = compute_drop_window(
            exam.start_time,
            exam.end_time,
            target_day,
            slot_index,
            grid=self.grid,
            zone=self.zone,
        )
        draft = replace(ExamDraft.from_exam(exam), start_time=start_time, end_time=end_time)
        logger.info("Rescheduling exam %s to %s (slot %d)", exam_id, target_day.isoformat(), slot_index)
        return self.save(draft, exam_id=exam_id, require_room=False, confirm=confirm, on_saved=on_saved)

    def delete(self, exam_id: str) -> None:
        exam = self.get_exam(exam_id)
        self.repos.exams.delete(exam)
        logger.info("Deleted exam %s", exam_id)

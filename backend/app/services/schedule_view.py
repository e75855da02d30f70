"""Student schedule presentation: day grouping, conflict flags and countdown."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Literal

from app.core.clock import as_utc
from app.models.exam import Exam
from app.services.conflict_service import ExamConflict, conflicting_exam_ids, find_conflicts

ExamTiming = Literal["today", "upcoming", "past"]


@dataclass(frozen=True)
class Countdown:
    days: int
    hours: int
    minutes: int
    seconds: int


@dataclass
class ScheduleDay:
    day: date
    exams: list[Exam]


@dataclass
class ScheduleView:
    days: list[ScheduleDay]
    conflicts: list[ExamConflict[Exam]]
    conflicting_ids: set[str]
    next_exam: Exam | None
    countdown: Countdown | None

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)


def time_until(target: datetime, now: datetime) -> Countdown | None:
    remaining = int((as_utc(target) - as_utc(now)).total_seconds())
    if remaining <= 0:
        return None
    days, remaining = divmod(remaining, 86400)
    hours, remaining = divmod(remaining, 3600)
    minutes, seconds = divmod(remaining, 60)
    return Countdown(days=days, hours=hours, minutes=minutes, seconds=seconds)


def exam_timing(exam: Exam, now: datetime, zone: tzinfo) -> ExamTiming:
    start = as_utc(exam.start_time)
    if start.astimezone(zone).date() == as_utc(now).astimezone(zone).date():
        return "today"
    if start > as_utc(now):
        return "upcoming"
    return "past"


def group_by_day(exams: Sequence[Exam], zone: tzinfo) -> list[ScheduleDay]:
    grouped: dict[date, list[Exam]] = {}
    for exam in exams:
        day = as_utc(exam.start_time).astimezone(zone).date()
        grouped.setdefault(day, []).append(exam)
    return [ScheduleDay(day=day, exams=grouped[day]) for day in sorted(grouped)]


def next_upcoming_exam(exams: Sequence[Exam], now: datetime) -> Exam | None:
    upcoming = [exam for exam in exams if as_utc(exam.start_time) > as_utc(now)]
    if not upcoming:
        return None
    return min(upcoming, key=lambda exam: as_utc(exam.start_time))


def build_schedule(exams: Sequence[Exam], *, now: datetime, zone: tzinfo) -> ScheduleView:
    conflicts = find_conflicts(exams)
    next_exam = next_upcoming_exam(exams, now)
    return ScheduleView(
        days=group_by_day(exams, zone),
        conflicts=conflicts,
        conflicting_ids=conflicting_exam_ids(conflicts),
        next_exam=next_exam,
        countdown=time_until(next_exam.start_time, now) if next_exam is not None else None,
    )

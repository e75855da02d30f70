"""Exam time-overlap detection.

Two exams conflict when their closed time windows intersect, so an exam ending
at 12:00 conflicts with one starting at 12:00. The same predicate backs the
student-wide check (any two exams) and the admin room check (same room only).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Protocol, TypeVar

from app.core.clock import as_utc


class TimeWindow(Protocol):
    start_time: datetime
    end_time: datetime


class RoomedExam(TimeWindow, Protocol):
    id: str | None
    room_id: str | None


ExamT = TypeVar("ExamT", bound=TimeWindow)


@dataclass(frozen=True)
class ExamConflict(Generic[ExamT]):
    exam_a: ExamT
    exam_b: ExamT


def windows_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    # Applied to the raw endpoints; a window with start > end never raises here.
    return as_utc(start_a) <= as_utc(end_b) and as_utc(start_b) <= as_utc(end_a)


def exams_overlap(exam_a: TimeWindow, exam_b: TimeWindow) -> bool:
    return windows_overlap(exam_a.start_time, exam_a.end_time, exam_b.start_time, exam_b.end_time)


def find_conflicts(exams: Sequence[ExamT]) -> list[ExamConflict[ExamT]]:
    """Return every overlapping pair once, ordered by (i, j) over the input order."""
    conflicts: list[ExamConflict[ExamT]] = []
    n = len(exams)
    for i in range(n):
        exam_a = exams[i]
        for j in range(i + 1, n):
            exam_b = exams[j]
            if exams_overlap(exam_a, exam_b):
                conflicts.append(ExamConflict(exam_a=exam_a, exam_b=exam_b))
    return conflicts


def find_room_conflicts(
    candidate: RoomedExam,
    existing: Iterable[RoomedExam],
    *,
    exclude_id: str | None = None,
) -> list[RoomedExam]:
    """Existing exams in the candidate's room whose windows overlap the candidate's."""
    if candidate.room_id is None:
        return []
    return [
        exam
        for exam in existing
        if not (exclude_id is not None and exam.id == exclude_id)
        and exam.room_id == candidate.room_id
        and exams_overlap(candidate, exam)
    ]


def conflicting_exam_ids(conflicts: Iterable[ExamConflict]) -> set[str]:
    ids: set[str] = set()
    for conflict in conflicts:
        ids.add(conflict.exam_a.id)
        ids.add(conflict.exam_b.id)
    return ids

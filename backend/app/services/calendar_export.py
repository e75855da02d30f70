from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from app.core.clock import as_utc, utc_now
from app.models.exam import Exam, ExamStatus

PRODUCT_ID = "-//University Exam Scheduler//EN"
UID_DOMAIN = "university-exam-scheduler"


def format_ical_datetime(value: datetime) -> str:
    return as_utc(value).strftime("%Y%m%dT%H%M%SZ")


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,").replace("\n", "\\n")


def exam_event(exam: Exam, *, stamp: datetime) -> list[str]:
    course = exam.course
    location = exam.room.label if exam.room is not None else "TBD"
    return [
        "BEGIN:VEVENT",
        f"UID:exam-{exam.id}@{UID_DOMAIN}",
        f"DTSTAMP:{format_ical_datetime(stamp)}",
        f"DTSTART:{format_ical_datetime(exam.start_time)}",
        f"DTEND:{format_ical_datetime(exam.end_time)}",
        f"SUMMARY:{_escape(course.code)} Exam",
        f"DESCRIPTION:{_escape(f'Exam for {course.name}')}",
        f"LOCATION:{_escape(location)}",
        "STATUS:CANCELLED" if exam.status == ExamStatus.CANCELLED else "STATUS:CONFIRMED",
        "END:VEVENT",
    ]


def build_calendar(exams: Sequence[Exam], *, now: datetime | None = None) -> str:
    stamp = now or utc_now()
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODUCT_ID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for exam in exams:
        lines.extend(exam_event(exam, stamp=stamp))
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines) + "\r\n"

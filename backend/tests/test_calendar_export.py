from datetime import datetime, timezone

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.exam import Exam, ExamStatus
from app.models.room import Room
from app.services.calendar_export import build_calendar, format_ical_datetime


def test_format_uses_utc_basic_form():
    assert format_ical_datetime(datetime(2030, 6, 10, 9, 5, 7)) == "20300610T090507Z"


def test_calendar_lists_each_exam(repos):
    course = repos.courses.add(Course(code="CS101", name="Intro, Computing; Part 1", department="CS"))
    room = repos.rooms.add(Room(building="Science Building", number="101", capacity=120))
    scheduled = repos.exams.add(
        Exam(
            course_id=course.id,
            room_id=room.id,
            start_time=datetime(2030, 6, 10, 9, tzinfo=timezone.utc),
            end_time=datetime(2030, 6, 10, 11, tzinfo=timezone.utc),
        )
    )
    cancelled = repos.exams.add(
        Exam(
            course_id=course.id,
            start_time=datetime(2030, 6, 12, 9, tzinfo=timezone.utc),
            end_time=datetime(2030, 6, 12, 11, tzinfo=timezone.utc),
            status=ExamStatus.CANCELLED,
        )
    )

    text = build_calendar([scheduled, cancelled], now=datetime(2030, 6, 1, tzinfo=timezone.utc))
    lines = text.split("\r\n")

    assert lines[0] == "BEGIN:VCALENDAR"
    assert text.endswith("END:VCALENDAR\r\n")
    assert lines.count("BEGIN:VEVENT") == 2
    assert f"UID:exam-{scheduled.id}@university-exam-scheduler" in lines
    assert "DTSTART:20300610T090000Z" in lines
    assert "DTEND:20300610T110000Z" in lines
    assert "SUMMARY:CS101 Exam" in lines
    assert "DESCRIPTION:Exam for Intro\\, Computing\\; Part 1" in lines
    assert "LOCATION:Science Building\\, Room 101" in lines
    assert "LOCATION:TBD" in lines
    assert "STATUS:CANCELLED" in lines
    assert "DTSTAMP:20300601T000000Z" in lines


def test_calendar_download(client, repos, student):
    user, headers = student
    course = repos.courses.add(Course(code="BIO110", name="General Biology", department="Biology"))
    repos.enrollments.add(Enrollment(user_id=user.id, course_id=course.id, semester="Fall 2030"))
    repos.exams.add(
        Exam(
            course_id=course.id,
            start_time=datetime(2030, 6, 10, 9, tzinfo=timezone.utc),
            end_time=datetime(2030, 6, 10, 11, tzinfo=timezone.utc),
        )
    )

    response = client.get(f"/api/schedule/user/{user.id}/calendar.ics", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert response.headers["content-disposition"] == 'attachment; filename="student-exam-schedule.ics"'
    assert "SUMMARY:BIO110 Exam" in response.text

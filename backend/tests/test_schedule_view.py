from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.exam import Exam
from app.models.room import Room
from app.services.countdown import CountdownTicker
from app.services.schedule_view import Countdown, build_schedule, exam_timing, group_by_day, time_until

NOW = datetime(2030, 6, 10, 9, 0, tzinfo=timezone.utc)


@dataclass
class Slot:
    id: str
    start_time: datetime
    end_time: datetime


def slot(exam_id, start, hours=2):
    return Slot(id=exam_id, start_time=start, end_time=start + timedelta(hours=hours))


def test_time_until_splits_into_units():
    target = NOW + timedelta(days=2, hours=3, minutes=4, seconds=5)

    assert time_until(target, NOW) == Countdown(days=2, hours=3, minutes=4, seconds=5)


def test_time_until_is_none_once_reached():
    assert time_until(NOW, NOW) is None
    assert time_until(NOW - timedelta(seconds=1), NOW) is None


def test_exam_timing_relative_to_today():
    zone = timezone.utc
    assert exam_timing(slot("a", NOW.replace(hour=14)), NOW, zone) == "today"
    assert exam_timing(slot("b", NOW.replace(hour=7)), NOW, zone) == "today"
    assert exam_timing(slot("c", NOW + timedelta(days=1)), NOW, zone) == "upcoming"
    assert exam_timing(slot("d", NOW - timedelta(days=1)), NOW, zone) == "past"


def test_days_are_grouped_in_schedule_zone():
    zone = ZoneInfo("America/New_York")
    # 02:00 UTC on the 11th is still the 10th in New York
    late = slot("late", datetime(2030, 6, 11, 2, 0, tzinfo=timezone.utc))
    early = slot("early", datetime(2030, 6, 10, 14, 0, tzinfo=timezone.utc))
    next_day = slot("next", datetime(2030, 6, 11, 15, 0, tzinfo=timezone.utc))

    days = group_by_day([next_day, late, early], zone)

    assert [day.day.isoformat() for day in days] == ["2030-06-10", "2030-06-11"]
    assert [exam.id for exam in days[0].exams] == ["late", "early"]


def test_build_schedule_flags_conflicts_and_next_exam():
    exams = [
        slot("past", NOW - timedelta(days=3)),
        slot("a", NOW + timedelta(days=1)),
        slot("b", NOW + timedelta(days=1, hours=1)),
        slot("c", NOW + timedelta(days=5)),
    ]

    view = build_schedule(exams, now=NOW, zone=timezone.utc)

    assert view.has_conflicts is True
    assert view.conflicting_ids == {"a", "b"}
    assert view.next_exam.id == "a"
    assert view.countdown == Countdown(days=1, hours=0, minutes=0, seconds=0)


def test_build_schedule_without_upcoming_exams():
    view = build_schedule([slot("past", NOW - timedelta(days=1))], now=NOW, zone=timezone.utc)

    assert view.next_exam is None
    assert view.countdown is None
    assert view.has_conflicts is False


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def test_ticker_counts_down_and_finishes():
    clock = FakeClock(NOW)
    updates = []
    ticker = CountdownTicker(NOW + timedelta(seconds=2), updates.append, clock=clock)

    assert ticker.tick() is True
    clock.now += timedelta(seconds=1)
    assert ticker.tick() is True
    clock.now += timedelta(seconds=1)
    assert ticker.tick() is False

    assert updates == [
        Countdown(days=0, hours=0, minutes=0, seconds=2),
        Countdown(days=0, hours=0, minutes=0, seconds=1),
        None,
    ]


def test_ticker_thread_stops_when_target_passed():
    updates = []
    ticker = CountdownTicker(NOW, updates.append, interval_seconds=0.01, clock=lambda: NOW)

    ticker.start()
    ticker._thread.join(timeout=2)

    assert ticker.running is False
    assert updates == [None]
    ticker.stop()


def test_ticker_stop_ends_the_loop():
    updates = []
    ticker = CountdownTicker(NOW + timedelta(days=1), updates.append, interval_seconds=0.01, clock=lambda: NOW)

    ticker.start()
    assert ticker.running is True
    ticker.stop(timeout=2)

    assert ticker.running is False


def test_schedule_endpoint(client, repos, student):
    user, headers = student
    course = repos.courses.add(Course(code="CS101", name="Introduction to Computer Science", department="CS"))
    other = repos.courses.add(Course(code="ENG105", name="Academic Writing", department="English"))
    room = repos.rooms.add(Room(building="Science Building", number="101", capacity=120))
    for item in (course, other):
        repos.enrollments.add(Enrollment(user_id=user.id, course_id=item.id, semester="Fall 2030"))
    first = repos.exams.add(
        Exam(
            course_id=course.id,
            room_id=room.id,
            start_time=datetime(2099, 1, 15, 10, tzinfo=timezone.utc),
            end_time=datetime(2099, 1, 15, 12, tzinfo=timezone.utc),
        )
    )
    second = repos.exams.add(
        Exam(
            course_id=other.id,
            start_time=datetime(2099, 1, 15, 12, tzinfo=timezone.utc),
            end_time=datetime(2099, 1, 15, 14, tzinfo=timezone.utc),
        )
    )

    response = client.get(f"/api/schedule/user/{user.id}", headers=headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["hasConflicts"] is True
    assert [day["day"] for day in data["days"]] == ["2099-01-15"]
    exams = data["days"][0]["exams"]
    assert [exam["id"] for exam in exams] == [first.id, second.id]
    assert all(exam["hasConflict"] and exam["timing"] == "upcoming" for exam in exams)
    assert exams[0]["room"]["building"] == "Science Building"
    assert exams[1]["room"] is None
    assert data["conflicts"][0]["examA"]["id"] == first.id
    assert data["nextExam"]["exam"]["id"] == first.id
    assert data["nextExam"]["countdown"]["days"] > 0


def test_empty_schedule(client, student):
    user, headers = student

    data = client.get(f"/api/schedule/user/{user.id}", headers=headers).json()["data"]

    assert data == {"days": [], "hasConflicts": False, "conflicts": [], "nextExam": None}

from dataclasses import dataclass
from datetime import datetime, timezone

from app.services.conflict_service import (
    conflicting_exam_ids,
    find_conflicts,
    find_room_conflicts,
    windows_overlap,
)


@dataclass
class Slot:
    id: str
    start_time: datetime
    end_time: datetime
    room_id: str | None = "r1"


def at(hour, minute=0, day=10):
    return datetime(2030, 6, day, hour, minute, tzinfo=timezone.utc)


def slot(exam_id, start_hour, end_hour, room_id="r1", day=10):
    return Slot(id=exam_id, start_time=at(start_hour, day=day), end_time=at(end_hour, day=day), room_id=room_id)


def test_partial_overlap_is_a_conflict():
    conflicts = find_conflicts([slot("a", 10, 12), slot("b", 11, 13)])

    assert len(conflicts) == 1
    assert conflicts[0].exam_a.id == "a"
    assert conflicts[0].exam_b.id == "b"


def test_touching_endpoints_conflict():
    conflicts = find_conflicts([slot("a", 10, 12), slot("b", 12, 14)])
    assert [(item.exam_a.id, item.exam_b.id) for item in conflicts] == [("a", "b")]


def test_disjoint_windows_do_not_conflict():
    assert find_conflicts([slot("a", 10, 12), slot("b", 13, 14)]) == []


def test_same_time_on_different_days_does_not_conflict():
    assert find_conflicts([slot("a", 10, 12, day=10), slot("b", 10, 12, day=11)]) == []


def test_each_pair_is_reported_once_in_input_order():
    exams = [slot("a", 9, 11), slot("b", 10, 12), slot("c", 10, 11), slot("d", 15, 16)]

    pairs = [(item.exam_a.id, item.exam_b.id) for item in find_conflicts(exams)]

    assert pairs == [("a", "b"), ("a", "c"), ("b", "c")]
    assert conflicting_exam_ids(find_conflicts(exams)) == {"a", "b", "c"}


def test_inverted_window_is_compared_as_given():
    # start after end: only the raw endpoint comparison applies
    assert windows_overlap(at(12), at(10), at(9), at(12)) is True
    assert windows_overlap(at(12), at(10), at(11), at(13)) is False


def test_naive_and_aware_datetimes_compare_as_utc():
    naive = Slot(id="a", start_time=datetime(2030, 6, 10, 10), end_time=datetime(2030, 6, 10, 12))
    assert len(find_conflicts([naive, slot("b", 11, 13)])) == 1


def test_room_conflicts_only_consider_the_same_room():
    candidate = slot(None, 10, 12, room_id="r1")
    existing = [slot("x", 11, 13, room_id="r1"), slot("y", 11, 13, room_id="r2"), slot("z", 14, 15, room_id="r1")]

    assert [exam.id for exam in find_room_conflicts(candidate, existing)] == ["x"]


def test_room_conflicts_exclude_the_exam_being_edited():
    candidate = slot("x", 10, 12)
    existing = [slot("x", 10, 12), slot("w", 11, 12)]

    assert [exam.id for exam in find_room_conflicts(candidate, existing, exclude_id="x")] == ["w"]


def test_candidate_without_room_never_conflicts():
    assert find_room_conflicts(slot(None, 10, 12, room_id=None), [slot("x", 10, 12, room_id=None)]) == []

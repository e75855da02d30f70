"""Seed demo university data for the exam scheduler.

Run:
  PYTHONPATH=backend python scripts/seed_university_data.py

Safe to run repeatedly; existing rows are matched on their natural keys.
"""

from __future__ import annotations

import os
from datetime import date, datetime, time, timedelta

from sqlalchemy import func, select

from app.core.clock import schedule_zone
from app.core.security import create_identity_token
from app.db.bootstrap import ensure_schema
from app.db.session import SessionLocal
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.exam import Exam, ExamStatus
from app.models.learning_preference import LearningPreference
from app.models.learning_recommendation import LearningRecommendation
from app.models.room import Room
from app.models.study_resource import ResourceType, StudyResource
from app.models.user import User, UserRole
from app.repositories import Repositories
from app.services.recommendations import RecommendationGenerator

SEMESTER = os.getenv("SEED_SEMESTER", "Spring 2027").strip() or "Spring 2027"
RESOURCE_BASE_URL = os.getenv("SEED_RESOURCE_BASE_URL", "https://university.edu/resources").rstrip("/")

ADMIN_PROFILE = {
    "external_id": "admin_identity_id",
    "email": "admin@university.edu",
    "first_name": "Admin",
    "last_name": "User",
    "role": UserRole.ADMIN,
}

STUDENT_PROFILE = {
    "external_id": "student_identity_id",
    "email": "student@university.edu",
    "first_name": "Student",
    "last_name": "User",
    "role": UserRole.STUDENT,
}

COURSES = [
    ("CS101", "Introduction to Computer Science", "Computer Science"),
    ("MATH201", "Calculus II", "Mathematics"),
    ("ENG105", "World Literature", "English"),
    ("BIO110", "Introduction to Biology", "Biology"),
]

ROOMS = [
    ("Main Building", "101", 100),
    ("Science Building", "203", 80),
    ("Library", "305", 50),
    ("Engineering Building", "110", 120),
]

RESOURCE_TYPES = [
    ResourceType.VIDEO,
    ResourceType.ARTICLE,
    ResourceType.PRACTICE_QUIZ,
    ResourceType.TEXTBOOK,
    ResourceType.NOTES,
]


def first_exam_day() -> date:
    raw = os.getenv("SEED_EXAM_START_DATE", "").strip()
    if raw:
        return date.fromisoformat(raw)
    return date.today() + timedelta(days=14)


def upsert_user(session, profile: dict) -> User:
    user = session.execute(
        select(User).where(func.lower(User.email) == profile["email"])
    ).scalar_one_or_none()
    if user is None:
        user = User(**profile)
        session.add(user)
    else:
        user.external_id = profile["external_id"]
        user.role = profile["role"]
    session.flush()
    return user


def upsert_courses(session) -> list[Course]:
    courses = []
    for code, name, department in COURSES:
        course = session.execute(select(Course).where(Course.code == code)).scalar_one_or_none()
        if course is None:
            course = Course(code=code, name=name, department=department)
            session.add(course)
        courses.append(course)
    session.flush()
    return courses


def upsert_rooms(session) -> list[Room]:
    rooms = []
    for building, number, capacity in ROOMS:
        room = session.execute(
            select(Room).where(Room.building == building, Room.number == number)
        ).scalar_one_or_none()
        if room is None:
            room = Room(building=building, number=number, capacity=capacity)
            session.add(room)
        rooms.append(room)
    session.flush()
    return rooms


def enroll(session, student: User, courses: list[Course]) -> None:
    for course in courses:
        existing = session.execute(
            select(Enrollment).where(
                Enrollment.user_id == student.id,
                Enrollment.course_id == course.id,
                Enrollment.semester == SEMESTER,
            )
        ).scalar_one_or_none()
        if existing is None:
            session.add(Enrollment(user_id=student.id, course_id=course.id, semester=SEMESTER))
    session.flush()


def upsert_exams(session, courses: list[Course], rooms: list[Room]) -> None:
    zone = schedule_zone()
    start_day = first_exam_day()
    for index, course in enumerate(courses):
        # one two-hour morning exam per course on consecutive days
        day = start_day + timedelta(days=index)
        start_time = datetime.combine(day, time(hour=10), tzinfo=zone)
        existing = session.execute(
            select(Exam).where(Exam.course_id == course.id, Exam.start_time == start_time)
        ).unique().scalar_one_or_none()
        if existing is None:
            session.add(
                Exam(
                    course_id=course.id,
                    room_id=rooms[index % len(rooms)].id,
                    start_time=start_time,
                    end_time=start_time + timedelta(hours=2),
                    status=ExamStatus.SCHEDULED,
                )
            )
    session.flush()


def upsert_resources(session, courses: list[Course]) -> None:
    for course in courses:
        for resource_type in RESOURCE_TYPES:
            existing = session.execute(
                select(StudyResource).where(
                    StudyResource.course_id == course.id,
                    StudyResource.type == resource_type,
                )
            ).unique().scalars().first()
            if existing is not None:
                continue
            label = resource_type.value.lower()
            session.add(
                StudyResource(
                    course_id=course.id,
                    type=resource_type,
                    title=f"{resource_type.value} for {course.code}",
                    description=f"A {label} resource for {course.name}",
                    url=f"{RESOURCE_BASE_URL}/{course.code}/{label}",
                )
            )
    session.flush()


def ensure_preference(session, student: User) -> None:
    existing = session.execute(
        select(LearningPreference).where(LearningPreference.user_id == student.id)
    ).scalars().first()
    if existing is None:
        session.add(LearningPreference(user_id=student.id, preferred_type=ResourceType.VIDEO, study_duration=60))
    session.flush()


def count(session, model) -> int:
    return session.execute(select(func.count(model.id))).scalar_one()


def main() -> None:
    ensure_schema()
    with SessionLocal() as session:
        admin = upsert_user(session, ADMIN_PROFILE)
        student = upsert_user(session, STUDENT_PROFILE)
        courses = upsert_courses(session)
        rooms = upsert_rooms(session)
        enroll(session, student, courses)
        upsert_exams(session, courses, rooms)
        upsert_resources(session, courses)
        ensure_preference(session, student)
        session.commit()

        created = RecommendationGenerator(Repositories.for_session(session)).generate(student.id)

        course_count = count(session, Course)
        room_count = count(session, Room)
        exam_count = count(session, Exam)
        resource_count = count(session, StudyResource)
        recommendation_count = count(session, LearningRecommendation)
        admin_token = create_identity_token({"sub": admin.external_id, "email": admin.email})
        student_token = create_identity_token({"sub": student.external_id, "email": student.email})

    print("University data seeded successfully.")
    print("")
    print(f"Courses: {course_count}")
    print(f"Rooms: {room_count}")
    print(f"Exams: {exam_count}")
    print(f"Study resources: {resource_count}")
    print(f"Recommendations: {recommendation_count} ({len(created)} new)")
    print("")
    print("Bearer tokens for local testing (signed with IDENTITY_JWT_SECRET):")
    print(f"  Admin:   {admin_token}")
    print(f"  Student: {student_token}")


if __name__ == "__main__":
    main()

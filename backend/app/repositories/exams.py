from collections.abc import Iterable

from sqlalchemy import select

from app.models.exam import Exam
from app.repositories.base import SqlRepository


class ExamRepository(SqlRepository[Exam]):
    model = Exam

    def list(self):
        return self.db.execute(select(Exam).order_by(Exam.start_time.asc())).unique().scalars().all()

    def list_for_course(self, course_id: str):
        return self.db.execute(select(Exam).where(Exam.course_id == course_id)).unique().scalars().all()

    def list_for_courses(self, course_ids: Iterable[str]):
        ids = list(course_ids)
        if not ids:
            return []
        return (
            self.db.execute(select(Exam).where(Exam.course_id.in_(ids)).order_by(Exam.start_time.asc()))
            .unique()
            .scalars()
            .all()
        )

    def list_in_room(self, room_id: str):
        return self.db.execute(select(Exam).where(Exam.room_id == room_id)).unique().scalars().all()

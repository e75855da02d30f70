from sqlalchemy import select

from app.models.course import Course
from app.repositories.base import SqlRepository


class CourseRepository(SqlRepository[Course]):
    model = Course
    conflict_message = "Course code already exists"

    def get_by_code(self, code: str) -> Course | None:
        return self.db.execute(select(Course).where(Course.code == code)).scalar_one_or_none()

    def list_by_code(self):
        return self.db.execute(select(Course).order_by(Course.code.asc())).scalars().all()

from sqlalchemy import select

from app.models.enrollment import Enrollment
from app.repositories.base import SqlRepository


class EnrollmentRepository(SqlRepository[Enrollment]):
    model = Enrollment
    conflict_message = "User is already enrolled in this course for the specified semester"

    def list_for_user(self, user_id: str):
        return (
            self.db.execute(
                select(Enrollment).where(Enrollment.user_id == user_id).order_by(Enrollment.created_at.asc())
            )
            .unique()
            .scalars()
            .all()
        )

    def find(self, user_id: str, course_id: str, semester: str) -> Enrollment | None:
        return self.db.execute(
            select(Enrollment).where(
                Enrollment.user_id == user_id,
                Enrollment.course_id == course_id,
                Enrollment.semester == semester,
            )
        ).unique().scalar_one_or_none()

    def course_ids_for_user(self, user_id: str) -> list[str]:
        rows = self.db.execute(select(Enrollment.course_id).where(Enrollment.user_id == user_id)).scalars().all()
        # The same course can appear once per semester.
        return list(dict.fromkeys(rows))

from collections.abc import Iterable

from sqlalchemy import select

from app.models.study_resource import StudyResource
from app.repositories.base import SqlRepository


class StudyResourceRepository(SqlRepository[StudyResource]):
    model = StudyResource

    def list_for_course(self, course_id: str):
        query = (
            select(StudyResource)
            .where(StudyResource.course_id == course_id)
            .order_by(StudyResource.created_seq.asc(), StudyResource.id.asc())
        )
        return self.db.execute(query).unique().scalars().all()

    def list_for_courses(self, course_ids: Iterable[str]):
        ids = list(course_ids)
        if not ids:
            return []
        return (
            self.db.execute(
                select(StudyResource)
                .where(StudyResource.course_id.in_(ids))
                .order_by(StudyResource.created_seq.asc(), StudyResource.id.asc())
            )
            .unique()
            .scalars()
            .all()
        )

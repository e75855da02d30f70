from sqlalchemy import select

from app.models.learning_recommendation import LearningRecommendation
from app.repositories.base import SqlRepository


class LearningRecommendationRepository(SqlRepository[LearningRecommendation]):
    model = LearningRecommendation

    def list_for_user(self, user_id: str, *, course_id: str | None = None):
        query = select(LearningRecommendation).where(LearningRecommendation.user_id == user_id)
        if course_id is not None:
            query = query.where(LearningRecommendation.course_id == course_id)
        query = query.order_by(LearningRecommendation.priority.desc(), LearningRecommendation.created_at.asc())
        return self.db.execute(query).unique().scalars().all()

    def resource_ids_for_user(self, user_id: str) -> set[str]:
        return set(
            self.db.execute(
                select(LearningRecommendation.resource_id).where(LearningRecommendation.user_id == user_id)
            ).scalars()
        )

    def add_many(self, records: list[LearningRecommendation]) -> list[LearningRecommendation]:
        self.db.add_all(records)
        self.commit()
        for record in records:
            self.db.refresh(record)
        return records

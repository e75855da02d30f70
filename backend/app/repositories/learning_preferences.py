from sqlalchemy import select

from app.models.learning_preference import LearningPreference
from app.repositories.base import SqlRepository


class LearningPreferenceRepository(SqlRepository[LearningPreference]):
    model = LearningPreference

    def list_for_user(self, user_id: str):
        # Oldest first: callers treat the first row as the effective preference.
        return (
            self.db.execute(
                select(LearningPreference)
                .where(LearningPreference.user_id == user_id)
                .order_by(LearningPreference.created_seq.asc(), LearningPreference.id.asc())
            )
            .scalars()
            .all()
        )

    def first_for_user(self, user_id: str) -> LearningPreference | None:
        preferences = self.list_for_user(user_id)
        return preferences[0] if preferences else None

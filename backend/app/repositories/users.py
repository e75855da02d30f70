from sqlalchemy import or_, select

from app.models.user import User
from app.repositories.base import SqlRepository


class UserRepository(SqlRepository[User]):
    model = User
    conflict_message = "A user with this identity or email already exists"

    def get_by_external_id(self, external_id: str) -> User | None:
        return self.db.execute(select(User).where(User.external_id == external_id)).scalar_one_or_none()

    def get_by_reference(self, reference: str) -> User | None:
        """Resolve either the internal id or the identity provider subject."""
        return self.db.execute(
            select(User).where(or_(User.id == reference, User.external_id == reference))
        ).scalars().first()

    def list(self):
        return self.db.execute(select(User).order_by(User.email.asc())).scalars().all()

from sqlalchemy import select

from app.models.room import Room
from app.repositories.base import SqlRepository


class RoomRepository(SqlRepository[Room]):
    model = Room
    conflict_message = "A room with this building and number already exists"

    def find(self, building: str, number: str, *, exclude_id: str | None = None) -> Room | None:
        query = select(Room).where(Room.building == building, Room.number == number)
        if exclude_id is not None:
            query = query.where(Room.id != exclude_id)
        return self.db.execute(query).scalars().first()

from pydantic import Field

from app.schemas.common import ApiModel


class RoomBase(ApiModel):
    building: str = Field(min_length=1, max_length=200)
    number: str = Field(min_length=1, max_length=50)
    capacity: int = Field(ge=1, le=5000)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(ApiModel):
    building: str | None = Field(default=None, min_length=1, max_length=200)
    number: str | None = Field(default=None, min_length=1, max_length=50)
    capacity: int | None = Field(default=None, ge=1, le=5000)


class RoomOut(RoomBase):
    id: str

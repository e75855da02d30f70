from fastapi import APIRouter, Depends, status

from app.api.deps import get_repositories, require_admin
from app.core.exceptions import ConflictError, ResourceNotFoundError
from app.models.room import Room
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.room import RoomCreate, RoomOut, RoomUpdate
from app.services.identity import AuthContext

router = APIRouter()


def _get_room(repos: Repositories, room_id: str) -> Room:
    room = repos.rooms.get(room_id)
    if room is None:
        raise ResourceNotFoundError("Room", message="Room not found")
    return room


@router.get("", response_model=Envelope[list[RoomOut]])
def list_rooms(repos: Repositories = Depends(get_repositories)) -> dict:
    return success(repos.rooms.list())


@router.post("", response_model=Envelope[RoomOut], status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    if repos.rooms.find(payload.building, payload.number) is not None:
        raise ConflictError("A room with this building and number already exists")
    return success(repos.rooms.add(Room(**payload.model_dump())))


@router.put("/{room_id}", response_model=Envelope[RoomOut])
def update_room(
    room_id: str,
    payload: RoomUpdate,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    room = _get_room(repos, room_id)
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "building" in data or "number" in data:
        building = data.get("building", room.building)
        number = data.get("number", room.number)
        if repos.rooms.find(building, number, exclude_id=room_id) is not None:
            raise ConflictError("A room with this building and number already exists")
    return success(repos.rooms.update(room, data))


@router.delete("/{room_id}", response_model=Envelope[None])
def delete_room(
    room_id: str,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    repos.rooms.delete(_get_room(repos, room_id))
    return success(message="Room deleted successfully")

from __future__ import annotations

from fastapi import APIRouter, Depends

from chatrelay.core.dependencies import get_room_directory
from chatrelay.core.exceptions import UnknownRoomError
from chatrelay.schemas.chat import RoomListEvent, UserListEvent, UserOut
from chatrelay.services.rooms import RoomDirectory

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("", response_model=RoomListEvent)
def list_rooms(directory: RoomDirectory = Depends(get_room_directory)) -> RoomListEvent:
    return RoomListEvent(rooms=directory.active_rooms())


@router.get("/{room}/users", response_model=UserListEvent)
def list_room_users(
    room: str, directory: RoomDirectory = Depends(get_room_directory)
) -> UserListEvent:
    if not directory.exists(room):
        raise UnknownRoomError(f"Room '{room}' has no members", details={"room": room})
    return UserListEvent(users=[UserOut.model_validate(user) for user in directory.members(room)])

"""Outbound notifications and their addressing scope.

Each method builds one outbound event and hands it to the hub with the scope
it is delivered under.
"""

from __future__ import annotations

from chatrelay.core.utils import clock_time
from chatrelay.schemas.chat import (
    ACTIVITY,
    MESSAGE,
    ROOM_LIST,
    USER_LIST,
    ChatMessage,
    RoomListEvent,
    UserListEvent,
    UserOut,
)
from chatrelay.services.realtime import ConnectionHub
from chatrelay.services.rooms import RoomDirectory


def build_message(name: str, text: str) -> dict:
    """Message envelope, timestamped at dispatch time."""

    return ChatMessage(name=name, text=text, time=clock_time()).model_dump()


class BroadcastDispatcher:
    def __init__(
        self,
        hub: ConnectionHub,
        directory: RoomDirectory,
        *,
        admin_name: str = "Admin",
        welcome_text: str = "Welcome to Chat App",
    ) -> None:
        self._hub = hub
        self._directory = directory
        self.admin_name = admin_name
        self.welcome_text = welcome_text

    # unicast
    async def welcome(self, connection_id: str) -> None:
        await self._hub.send(
            connection_id, MESSAGE, build_message(self.admin_name, self.welcome_text)
        )

    async def joined_self(self, connection_id: str, room: str) -> None:
        await self._hub.send(
            connection_id,
            MESSAGE,
            build_message(self.admin_name, f"You have joined the {room} chat room"),
        )

    # room, sender excluded
    async def joined_others(self, connection_id: str, room: str, name: str) -> None:
        await self._hub.to_room(
            room,
            MESSAGE,
            build_message(self.admin_name, f"{name} has joined the room"),
            exclude=connection_id,
        )

    async def activity(self, connection_id: str, room: str, name: str) -> None:
        await self._hub.to_room(room, ACTIVITY, name, exclude=connection_id)

    # room, sender included
    async def notice(self, room: str, text: str) -> None:
        await self._hub.to_room(room, MESSAGE, build_message(self.admin_name, text))

    async def chat(self, room: str, name: str, text: str) -> None:
        await self._hub.to_room(room, MESSAGE, build_message(name, text))

    async def user_list(self, room: str) -> None:
        users = [UserOut.model_validate(user) for user in self._directory.members(room)]
        await self._hub.to_room(room, USER_LIST, UserListEvent(users=users).model_dump())

    # global
    async def room_list(self) -> None:
        await self._hub.broadcast(
            ROOM_LIST, RoomListEvent(rooms=self._directory.active_rooms()).model_dump()
        )

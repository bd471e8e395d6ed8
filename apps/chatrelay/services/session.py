"""Session lifecycle: connect, join, chat, typing activity and disconnect.

Every entry point runs under one lock so that an inbound event, including the
broadcasts it causes, completes before the next event is handled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from fastapi import WebSocket

from chatrelay.schemas.chat import (
    ACTIVITY,
    ENTER_ROOM,
    MESSAGE,
    ChatMessagePayload,
    EnterRoomPayload,
)
from chatrelay.services.broadcast import BroadcastDispatcher
from chatrelay.services.presence import PresenceRegistry
from chatrelay.services.realtime import ConnectionHub
from chatrelay.services.rooms import RoomDirectory

logger = logging.getLogger(__name__)


class SessionLifecycleController:
    def __init__(
        self,
        *,
        hub: ConnectionHub | None = None,
        registry: PresenceRegistry | None = None,
        admin_name: str = "Admin",
        welcome_text: str = "Welcome to Chat App",
    ) -> None:
        self.hub = hub or ConnectionHub()
        self.registry = registry or PresenceRegistry()
        self.directory = RoomDirectory(self.registry)
        self.dispatcher = BroadcastDispatcher(
            self.hub, self.directory, admin_name=admin_name, welcome_text=welcome_text
        )
        self._lock = asyncio.Lock()
        self._handlers: dict[str, Callable[[str, Any], Awaitable[None]]] = {
            ENTER_ROOM: self._enter_room,
            MESSAGE: self._message,
            ACTIVITY: self._activity,
        }

    async def connect(self, websocket: WebSocket) -> str:
        async with self._lock:
            connection_id = await self.hub.connect(websocket)
            logger.info("User %s connected", connection_id)
            await self.dispatcher.welcome(connection_id)
            return connection_id

    async def dispatch(self, connection_id: str, event: str, payload: Any) -> None:
        """Route a validated inbound event to its handler; unknown events are ignored."""

        handler = self._handlers.get(event)
        if handler is None:
            logger.debug("Ignoring unknown event %r from %s", event, connection_id)
            return
        async with self._lock:
            await handler(connection_id, payload)

    async def enter_room(self, connection_id: str, name: str, room: str) -> None:
        await self.dispatch(connection_id, ENTER_ROOM, EnterRoomPayload(name=name, room=room))

    async def send_message(self, connection_id: str, name: str, text: str) -> None:
        await self.dispatch(connection_id, MESSAGE, ChatMessagePayload(name=name, text=text))

    async def report_activity(self, connection_id: str, name: str) -> None:
        await self.dispatch(connection_id, ACTIVITY, name)

    async def disconnect(self, connection_id: str) -> None:
        async with self._lock:
            await self.hub.disconnect(connection_id)
            # Capture the entry first; removal erases what the room needs to hear.
            user = self.registry.lookup(connection_id)
            self.registry.remove(connection_id)
            if user is not None:
                logger.info("%s left room %s", user.name, user.room)
                await self.dispatcher.notice(user.room, f"{user.name} left the room")
                await self.dispatcher.user_list(user.room)
                await self.dispatcher.room_list()
            logger.info("User %s disconnected", connection_id)

    async def _enter_room(self, connection_id: str, payload: EnterRoomPayload) -> None:
        name, room = payload.name, payload.room
        previous = self.registry.lookup(connection_id)
        previous_room = previous.room if previous else None

        if previous_room is not None:
            await self.hub.leave(connection_id, previous_room)
            await self.dispatcher.notice(previous_room, f"{name} has left the room")

        user = self.registry.activate(connection_id, name, room)

        # Must follow activate() so the departing user is no longer counted.
        if previous_room is not None:
            await self.dispatcher.user_list(previous_room)

        await self.hub.join(connection_id, user.room)
        logger.info("%s joined room %s", user.name, user.room)

        await self.dispatcher.joined_self(connection_id, user.room)
        await self.dispatcher.joined_others(connection_id, user.room, user.name)
        await self.dispatcher.user_list(user.room)
        await self.dispatcher.room_list()

    async def _message(self, connection_id: str, payload: ChatMessagePayload) -> None:
        user = self.registry.lookup(connection_id)
        if user is None:
            logger.debug("Dropping message from unjoined connection %s", connection_id)
            return
        await self.dispatcher.chat(user.room, payload.name, payload.text)

    async def _activity(self, connection_id: str, name: str) -> None:
        user = self.registry.lookup(connection_id)
        if user is None:
            return
        await self.dispatcher.activity(connection_id, user.room, name)

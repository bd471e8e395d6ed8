"""WebSocket transport hub.

Owns the live sockets and their room subscriptions and provides the four
addressing scopes the chat core needs: one connection, a room (with or without
the sender) and every connection. Single-process, in-memory only.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import defaultdict
from typing import Any, Iterable

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def frame(event: str, data: Any) -> dict[str, Any]:
    return {"event": event, "data": data}


class ConnectionHub:
    """Tracks WebSocket connections and room subscriptions."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._sockets: dict[str, WebSocket] = {}
        self._rooms: dict[str, set[str]] = defaultdict(set)

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        connection_id = uuid.uuid4().hex
        async with self._lock:
            self._sockets[connection_id] = websocket
        return connection_id

    async def disconnect(self, connection_id: str) -> None:
        async with self._lock:
            self._drop(connection_id)

    async def join(self, connection_id: str, room: str) -> None:
        async with self._lock:
            if connection_id in self._sockets:
                self._rooms[room].add(connection_id)

    async def leave(self, connection_id: str, room: str) -> None:
        async with self._lock:
            self._discard(connection_id, room)

    def rooms_of(self, connection_id: str) -> set[str]:
        return {room for room, members in self._rooms.items() if connection_id in members}

    def connection_count(self) -> int:
        return len(self._sockets)

    async def send(self, connection_id: str, event: str, data: Any) -> None:
        async with self._lock:
            websocket = self._sockets.get(connection_id)
        if websocket is None:
            return
        await self._deliver([(connection_id, websocket)], frame(event, data))

    async def to_room(
        self, room: str, event: str, data: Any, *, exclude: str | None = None
    ) -> None:
        async with self._lock:
            targets = [
                (cid, self._sockets[cid])
                for cid in self._rooms.get(room, ())
                if cid != exclude and cid in self._sockets
            ]
        await self._deliver(targets, frame(event, data))

    async def broadcast(self, event: str, data: Any) -> None:
        async with self._lock:
            targets = list(self._sockets.items())
        await self._deliver(targets, frame(event, data))

    async def _deliver(self, targets: Iterable[tuple[str, WebSocket]], payload: dict) -> None:
        disconnected: list[str] = []
        for connection_id, websocket in targets:
            try:
                await websocket.send_json(payload)
            except Exception as exc:
                logger.warning("Send to %s failed: %s", connection_id, exc)
                disconnected.append(connection_id)

        if disconnected:
            async with self._lock:
                for connection_id in disconnected:
                    self._drop(connection_id)

    def _drop(self, connection_id: str) -> None:
        self._sockets.pop(connection_id, None)
        for room in list(self._rooms):
            self._discard(connection_id, room)

    def _discard(self, connection_id: str, room: str) -> None:
        members = self._rooms.get(room)
        if not members:
            return
        members.discard(connection_id)
        if not members:
            self._rooms.pop(room, None)

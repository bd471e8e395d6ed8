"""In-memory presence registry.

Holds one `User` per live connection that has joined a room. Rooms are not
stored; they are whatever `room` values the current users carry.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    """A connection that has joined a room under a display name."""

    id: str
    name: str
    room: str


class PresenceRegistry:
    """Authoritative table of active users keyed by connection id.

    Not synchronized; callers serialize access (see `SessionLifecycleController`).
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._users

    def activate(self, connection_id: str, name: str, room: str) -> User:
        """Insert or replace the entry for `connection_id`.

        A replaced entry moves to the end of the iteration order.
        """

        user = User(id=connection_id, name=name, room=room)
        self._users.pop(connection_id, None)
        self._users[connection_id] = user
        return user

    def remove(self, connection_id: str) -> None:
        self._users.pop(connection_id, None)

    def lookup(self, connection_id: str) -> User | None:
        return self._users.get(connection_id)

    def members_of(self, room: str) -> list[User]:
        return [user for user in self._users.values() if user.room == room]

    def active_room_names(self) -> set[str]:
        return {user.room for user in self._users.values()}

    def users(self) -> list[User]:
        return list(self._users.values())

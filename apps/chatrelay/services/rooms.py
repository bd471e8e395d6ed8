from __future__ import annotations

from chatrelay.services.presence import PresenceRegistry, User


class RoomDirectory:
    """Read-only room views derived from the presence registry."""

    def __init__(self, registry: PresenceRegistry) -> None:
        self._registry = registry

    def members(self, room: str) -> list[User]:
        return self._registry.members_of(room)

    def active_rooms(self) -> list[str]:
        # Order of first appearance in the registry, no duplicates.
        return list(dict.fromkeys(user.room for user in self._registry.users()))

    def exists(self, room: str) -> bool:
        return room in self._registry.active_room_names()

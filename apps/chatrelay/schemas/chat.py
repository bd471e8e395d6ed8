from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from chatrelay.core.exceptions import InvalidPayloadError

# Inbound event names
ENTER_ROOM = "enterRoom"
MESSAGE = "message"
ACTIVITY = "activity"

# Outbound event names
USER_LIST = "userList"
ROOM_LIST = "roomList"
ERROR = "error"


class InboundFrame(BaseModel):
    event: str
    data: Any = None


class EnterRoomPayload(BaseModel):
    name: str
    room: str


class ChatMessagePayload(BaseModel):
    name: str
    text: str


class ChatMessage(BaseModel):
    name: str
    text: str
    time: str


class UserOut(BaseModel):
    id: str
    name: str
    room: str

    model_config = ConfigDict(from_attributes=True)


class UserListEvent(BaseModel):
    users: list[UserOut]


class RoomListEvent(BaseModel):
    rooms: list[str]


_PAYLOAD_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    ENTER_ROOM: TypeAdapter(EnterRoomPayload),
    MESSAGE: TypeAdapter(ChatMessagePayload),
    ACTIVITY: TypeAdapter(str),
}


def parse_inbound(raw: Any) -> tuple[str, Any]:
    """Validate an inbound frame and the payload of known events.

    `raw` may be JSON text, JSON bytes or an already-decoded object. Unknown
    event names pass through with their raw data so the caller can decide to
    ignore them.
    """

    try:
        if isinstance(raw, (str, bytes)):
            frame = InboundFrame.model_validate_json(raw)
        else:
            frame = InboundFrame.model_validate(raw)
    except ValidationError as exc:
        raise InvalidPayloadError(
            "Malformed frame",
            details=exc.errors(include_url=False, include_input=False),
        ) from exc

    adapter = _PAYLOAD_ADAPTERS.get(frame.event)
    if adapter is None:
        return frame.event, frame.data
    try:
        return frame.event, adapter.validate_python(frame.data, strict=True)
    except ValidationError as exc:
        raise InvalidPayloadError(
            f"Malformed payload for '{frame.event}'",
            details=exc.errors(include_url=False, include_input=False),
        ) from exc

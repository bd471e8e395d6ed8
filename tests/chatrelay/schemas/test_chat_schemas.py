import pytest

from chatrelay.core.exceptions import InvalidPayloadError
from chatrelay.schemas.chat import ChatMessagePayload, EnterRoomPayload, parse_inbound


def test_parse_enter_room_from_json_text() -> None:
    event, payload = parse_inbound('{"event": "enterRoom", "data": {"name": "Alice", "room": "lobby"}}')

    assert event == "enterRoom"
    assert payload == EnterRoomPayload(name="Alice", room="lobby")


def test_parse_message_and_activity_from_objects() -> None:
    assert parse_inbound({"event": "message", "data": {"name": "A", "text": "hi"}}) == (
        "message",
        ChatMessagePayload(name="A", text="hi"),
    )
    assert parse_inbound({"event": "activity", "data": "Alice"}) == ("activity", "Alice")


def test_unknown_event_passes_raw_data_through() -> None:
    assert parse_inbound({"event": "wave", "data": [1, 2]}) == ("wave", [1, 2])


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        {"data": {}},
        {"event": "enterRoom", "data": {"name": "Alice"}},
        {"event": "message", "data": {"name": "A", "text": 5}},
        {"event": "activity", "data": {"name": "Alice"}},
    ],
)
def test_malformed_frames_raise_invalid_payload(raw) -> None:
    with pytest.raises(InvalidPayloadError) as excinfo:
        parse_inbound(raw)

    assert excinfo.value.code == "invalid_payload"
    assert isinstance(excinfo.value.details, list)

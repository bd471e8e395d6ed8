from __future__ import annotations

from typing import Any

import pytest


class FakeWebSocket:
    """Minimal stand-in for `fastapi.WebSocket` recording outbound frames.

    Frames are also appended to a shared `log` so tests can assert ordering
    across several connections.
    """

    def __init__(self, label: str, log: list[tuple[str, dict[str, Any]]] | None = None) -> None:
        self.label = label
        self.accepted = False
        self.closed = False
        self.sent: list[dict[str, Any]] = []
        self._log = log if log is not None else []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, data: dict[str, Any]) -> None:
        if self.closed:
            raise RuntimeError("socket closed")
        self.sent.append(data)
        self._log.append((self.label, data))

    def events(self, name: str | None = None) -> list[dict[str, Any]]:
        return [f for f in self.sent if name is None or f["event"] == name]

    def texts(self) -> list[str]:
        return [f["data"]["text"] for f in self.events("message")]


@pytest.fixture
def frame_log() -> list[tuple[str, dict[str, Any]]]:
    return []


@pytest.fixture
def make_socket(frame_log):
    def _make(label: str) -> FakeWebSocket:
        return FakeWebSocket(label, frame_log)

    return _make

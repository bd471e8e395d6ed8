from __future__ import annotations

import logging
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from chatrelay.core.dependencies import get_session_controller, get_settings
from chatrelay.core.exceptions import InvalidPayloadError
from chatrelay.core.settings import Settings
from chatrelay.schemas.chat import ERROR, parse_inbound
from chatrelay.services.session import SessionLifecycleController

logger = logging.getLogger(__name__)


def origin_allowed(websocket: WebSocket, settings: Settings) -> bool:
    """Apply the HTTP cross-origin policy to a websocket handshake.

    Clients that send no Origin (non-browser) and same-host pages are allowed.
    """

    origin = websocket.headers.get("origin")
    if not origin:
        return True
    if urlsplit(origin).netloc == websocket.headers.get("host"):
        return True
    allowed = settings.effective_cors_origins()
    return "*" in allowed or origin in allowed


async def receive_frame(websocket: WebSocket) -> str | bytes | None:
    """Return the payload of the next text or binary frame."""

    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    text = message.get("text")
    return text if text is not None else message.get("bytes")


def build_chat_router(path: str = "/ws") -> APIRouter:
    router = APIRouter(tags=["chat"])

    @router.websocket(path)
    async def chat_ws(
        websocket: WebSocket,
        controller: SessionLifecycleController = Depends(get_session_controller),
        settings: Settings = Depends(get_settings),
    ) -> None:
        if not origin_allowed(websocket, settings):
            logger.warning("Rejected websocket from origin %s", websocket.headers.get("origin"))
            await websocket.close(code=1008)
            return

        connection_id = await controller.connect(websocket)
        try:
            while True:
                raw = await receive_frame(websocket)
                try:
                    event, payload = parse_inbound(raw)
                except InvalidPayloadError as exc:
                    logger.warning("Rejected frame from %s: %s", connection_id, exc.message)
                    await controller.hub.send(connection_id, ERROR, exc.to_payload())
                    continue
                await controller.dispatch(connection_id, event, payload)
        except WebSocketDisconnect:
            pass
        finally:
            await controller.disconnect(connection_id)

    return router

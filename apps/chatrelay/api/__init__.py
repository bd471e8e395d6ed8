"""API router registration helpers.

Routers are imported inside `register_routes` so importing `chatrelay.api`
has no side effects.
"""

from fastapi import FastAPI

from chatrelay.core.settings import Settings


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Attach all API routers (lazy imports)."""
    from chatrelay.api.chat import build_chat_router
    from chatrelay.api.health import router as health_router
    from chatrelay.api.rooms import router as rooms_router

    routers = [
        health_router,
        rooms_router,
        build_chat_router(settings.websocket_path),
    ]
    for router in routers:
        app.include_router(router)

"""Dependency providers (FastAPI).

The session controller is app-scoped: one per FastAPI app, stored on
`app.state`, so separate apps (e.g. in tests) never share presence state.
"""

from __future__ import annotations

from starlette.requests import HTTPConnection

from chatrelay.core.settings import Settings
from chatrelay.services.rooms import RoomDirectory
from chatrelay.services.session import SessionLifecycleController


def build_session_controller(settings: Settings) -> SessionLifecycleController:
    return SessionLifecycleController(
        admin_name=settings.admin_name,
        welcome_text=settings.welcome_text,
    )


def get_session_controller(connection: HTTPConnection) -> SessionLifecycleController:
    return connection.app.state.session_controller


def get_room_directory(connection: HTTPConnection) -> RoomDirectory:
    return get_session_controller(connection).directory


def get_settings(connection: HTTPConnection) -> Settings:
    return connection.app.state.settings

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# Environment is loaded by Pydantic Settings (see chatrelay.core.settings).
from chatrelay.api import register_routes
from chatrelay.core.dependencies import build_session_controller
from chatrelay.core.exceptions import register_exception_handlers
from chatrelay.core.logging import setup_logging
from chatrelay.core.settings import Settings, settings as default_settings
from chatrelay.core.utils import use_system_time_locale

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    # Initialize logging early so all modules inherit the handlers/level
    setup_logging(settings.resolved_log_level)
    use_system_time_locale()

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.session_controller = build_session_controller(settings)

    register_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.effective_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app, settings)

    # Mounted last so API and websocket routes take precedence over "/".
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found; client assets not served", settings.static_dir)

    logger.info("%s initialized (env=%s)", settings.app_name, settings.app_env)
    return app


app = create_app()

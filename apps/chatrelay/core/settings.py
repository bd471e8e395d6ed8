from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_STATIC_DIR = PACKAGE_DIR / "public"


class Settings(BaseSettings):
    """Runtime settings for the chat relay.

    Loads from env with support for ".env" files next to the package and at the
    repo root. `.env` files are ignored under APP_ENV=test/ci.
    """

    _app_env = (os.getenv("APP_ENV") or "").strip().lower()
    _env_files = (
        []
        if _app_env in {"test", "ci"}
        else [
            str(PACKAGE_DIR / ".env"),  # apps/chatrelay/.env
            str(PACKAGE_DIR.parents[1] / ".env"),  # repo root .env
        ]
    )

    model_config = SettingsConfigDict(
        env_file=_env_files,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- App / Core ---
    app_env: str = Field(default="dev", alias="APP_ENV")
    app_name: str = Field(default="chatrelay", alias="APP_NAME")
    node_env: str = Field(default="development", alias="NODE_ENV")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3500, alias="PORT", ge=1, le=65535)

    # Logging
    log_level: str | None = Field(default=None, alias="CHATRELAY_LOG_LEVEL")
    log_level_fallback: str | None = Field(default=None, alias="LOG_LEVEL")

    # Cross-origin access for the browser client (ignored in production)
    cors_allow_origins: list[str] = Field(
        default=["http://localhost:5500", "http://127.0.0.1:5500"],
        alias="CORS_ALLOW_ORIGINS",
    )

    static_dir: Path = Field(default=DEFAULT_STATIC_DIR, alias="STATIC_DIR")

    # --- Chat ---
    admin_name: str = Field(default="Admin", alias="ADMIN_NAME")
    welcome_text: str = Field(default="Welcome to Chat App", alias="WELCOME_TEXT")
    websocket_path: str = Field(default="/ws", alias="WEBSOCKET_PATH")

    @property
    def is_production(self) -> bool:
        return self.node_env.strip().lower() == "production"

    @property
    def resolved_log_level(self) -> str | None:
        return self.log_level or self.log_level_fallback

    def effective_cors_origins(self) -> list[str]:
        """Origins allowed to open cross-origin connections; none in production."""

        if self.is_production:
            return []
        return list(self.cors_allow_origins)


settings = Settings()

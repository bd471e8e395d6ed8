import uvicorn

from chatrelay.core.logging import setup_logging
from chatrelay.core.settings import settings


def main() -> None:
    level = setup_logging(settings.resolved_log_level)
    uvicorn.run(
        "chatrelay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=level,
    )


if __name__ == "__main__":
    main()

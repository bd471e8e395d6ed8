from __future__ import annotations

import locale
import logging
from datetime import datetime

logger = logging.getLogger(__name__)


def use_system_time_locale() -> str | None:
    """Adopt the environment's LC_TIME so `clock_time` follows the host locale.

    Returns the locale name in effect, or None if the environment names a
    locale that is not installed (the current one is kept).
    """

    try:
        return locale.setlocale(locale.LC_TIME, "")
    except locale.Error as exc:
        logger.warning("Could not apply system time locale: %s", exc)
        return None


def clock_time(now: datetime | None = None) -> str:
    """Return a locale-aware time-of-day string (hours, minutes, seconds).

    Uses the process locale's time representation (`%X`), evaluated at call time.
    """

    return (now or datetime.now()).strftime("%X")


__all__ = ["clock_time", "use_system_time_locale"]

"""Process logging for the API server and operational scripts.

Request and domain telemetry goes through logfire; stdlib logging only
covers process-level messages (startup, uvicorn, auth route events).
"""

import logging
import sys

from invitely.config import Settings

# Libraries that log every request or query at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine")


def setup_logging(settings: Settings) -> None:
    """Send process logs to stdout at a level chosen by ``settings.debug``.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("invitely").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging ready (environment=%s, level=%s, version=%s)",
        settings.environment,
        logging.getLevelName(level),
        settings.git_sha,
    )

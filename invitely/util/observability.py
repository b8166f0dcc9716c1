"""Logfire setup and instrumentation hooks.

Services and repositories trace themselves with ``logfire.span`` and
``logfire.info``; this module only configures the exporter and switches on
the library integrations (FastAPI, SQLAlchemy, httpx).
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from invitely.config import Settings

# Liveness probes would otherwise dominate the request traces
UNTRACED_PATHS = ["/health"]


def configure_logfire(settings: Settings) -> None:
    """Configure the logfire exporter.

    ``observability.send_to_logfire`` wins when set; otherwise data is sent
    only when a token is present.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name="invitely-api",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token or None,
        console=logfire.ConsoleOptions(verbose=settings.debug),
    )

    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except the liveness probe."""
    logfire.instrument_fastapi(app, excluded_urls=UNTRACED_PATHS)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the async engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace calls to the Google tokeninfo endpoint."""
    logfire.instrument_httpx()

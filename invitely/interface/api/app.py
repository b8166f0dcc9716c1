"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from invitely.config import Settings
from invitely.interface.api.errors import register_error_handlers
from invitely.interface.api.routes import (
    admin_auth,
    admin_invites,
    admin_resellers,
    admin_templates,
    admin_users,
    health,
    invitations,
    public,
    templates,
    user_auth,
)
from invitely.util.di.container import create_container, setup_di
from invitely.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: Dependency container to use; the production container
            is built when omitted (tests pass one wired with mocks)
    """
    settings = Settings()

    # Logfire must be configured before instrumentation
    instrument_httpx()

    app_instance = FastAPI(
        title="Invitely API",
        description="Backend API for Invitely - digital invitations, templates, "
        "guest RSVPs and the reseller programme",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
            "X-Session-Id",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    register_error_handlers(app_instance)

    setup_di(app_instance, container or create_container())

    # Public
    app_instance.include_router(health.router)
    app_instance.include_router(templates.router)
    app_instance.include_router(public.router)

    # End users
    app_instance.include_router(user_auth.router)
    app_instance.include_router(invitations.router)

    # Administration
    app_instance.include_router(admin_auth.router)
    app_instance.include_router(admin_users.router)
    app_instance.include_router(admin_resellers.router)
    app_instance.include_router(admin_invites.router)
    app_instance.include_router(admin_templates.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()

"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from .routes import collect, control, events, reports


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        sim_instance = control.get_sim_instance()
        if sim_instance and hasattr(sim_instance, "set_tracker"):
            sim_instance.set_tracker(application.tracker)
        yield
        if sim_instance:
            await sim_instance.stop()
        await application.stop()

    fastapi_app = FastAPI(
        title="Planner Analytics API",
        description="Event tracking and self-hosted collection for the planning suite",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Browser pages posting events from another origin (API_CORS_ORIGINS)
    if application.settings.cors_origins:
        fastapi_app.add_middleware(
            CORSMiddleware,
            allow_origins=list(application.settings.cors_origins),
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type"],
        )

    fastapi_app.include_router(events.create_events_router(application))
    fastapi_app.include_router(collect.create_collect_router(application))
    fastapi_app.include_router(reports.create_reports_router(application))
    fastapi_app.include_router(control.create_control_router(application))

    return fastapi_app

"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import PortalError
from modules.auth.exceptions import RouteRedirect, SessionLoading
from modules.auth.routes import router as auth_router
from modules.admissions.routes import router as admissions_router
from modules.attendance.routes import admin_router as attendance_admin_router
from modules.attendance.routes import student_router as attendance_student_router
from modules.dashboard.routes import router as dashboard_router
from modules.profiles.routes import router as profiles_router

from .dependencies import get_container
from .middleware.session import session_cookie_middleware
from .routes import health, session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings.check_session_secret()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    get_container().sessions.close_all()


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def route_redirect_handler(request: Request, exc: RouteRedirect) -> JSONResponse:
    """401 for the login redirect, 403 for a role redirect; Location names the target."""
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.to_dict(), "redirect_to": exc.location},
        headers={"Location": exc.location},
    )


async def session_loading_handler(request: Request, exc: SessionLoading) -> JSONResponse:
    """The session is still bootstrapping; the client should poll /api/session."""
    return JSONResponse(
        status_code=202,
        content={"status": "loading", "message": exc.message},
        headers={"Retry-After": "1"},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Student portal backend: sessions, admissions, attendance and profiles",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.middleware("http")(session_cookie_middleware)

    # Error mapping
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RouteRedirect, route_redirect_handler)
    app.add_exception_handler(SessionLoading, session_loading_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(session.router, prefix="/api/session", tags=["session"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(admissions_router, prefix="/api/admin", tags=["admissions"])
    app.include_router(attendance_student_router, prefix="/api/student/attendance", tags=["attendance"])
    app.include_router(attendance_admin_router, prefix="/api/admin/attendance", tags=["attendance"])
    app.include_router(dashboard_router, prefix="/api", tags=["dashboard"])
    app.include_router(profiles_router, prefix="/api", tags=["profiles"])

    return app


# Application instance for uvicorn
app = create_app()

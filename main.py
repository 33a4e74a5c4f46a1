from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.errors import ContextNotInitializedError, UnknownRoleError
from core.logging_config import logger
from core.sessions import SessionStore

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.navigation import router as navigation_router
from routers.session import router as session_router
from routers.dashboard import router as dashboard_router
from routers.health import router as health_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Role-scoped navigation and content view routing for the village management platform",
    )

    # One store per application instance, injected via dependencies.session
    app.state.sessions = SessionStore()

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup / shutdown
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("Starting Village Navigation API")
        validate_config_on_startup(strict=settings.ENV == "production")

    @app.on_event("shutdown")
    async def on_shutdown():
        app.state.sessions.clear()
        logger.info("Sessions cleared")

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url} - {exc.detail}"
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(UnknownRoleError)
    async def handle_unknown_role(request: Request, exc: UnknownRoleError):
        logger.warning(f"Unknown role at {request.url} - {exc.role!r}")
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ContextNotInitializedError)
    async def handle_no_session(request: Request, exc: ContextNotInitializedError):
        logger.warning(f"Session not initialized at {request.url} - {exc}")
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(navigation_router)
    app.include_router(session_router)
    app.include_router(dashboard_router)
    app.include_router(health_router)

    return app


# Create the global FastAPI instance
app = create_app()

"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nas_api import __version__
from nas_api.api.v1 import router as v1_router
from nas_api.core.config import Settings, get_settings
from nas_api.core.errors import NasApiError
from nas_api.core.state import AppState, build_state

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


async def sweep_expired_sessions(state: AppState, interval_sec: int) -> None:
    """Periodically purge expired sessions so the store cannot grow without bound."""
    while True:
        await asyncio.sleep(interval_sec)
        purged = state.sessions.purge_expired()
        if purged:
            logger.info("Purged %s expired session(s)", purged)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the storage root and run the session sweeper for the app's lifetime."""
    state: AppState = app.state.nas
    root = state.settings.STORAGE_ROOT
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Storage root %s is not available: %s", root, e)

    sweeper = None
    if state.settings.SESSION_SWEEP_INTERVAL_SEC:
        sweeper = asyncio.create_task(
            sweep_expired_sessions(state, state.settings.SESSION_SWEEP_INTERVAL_SEC)
        )
    yield
    if sweeper is not None:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper


async def nas_api_error_handler(request: Request, exc: NasApiError) -> JSONResponse:
    """Render service errors as {"error": message} with the error's status."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code, content={"error": exc.message}, headers=headers
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies and parameters are a 400 with the first problem named."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its own, freshly provisioned stores."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="NAS Host API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.nas = build_state(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
        expose_headers=["Content-Length"],
        max_age=12 * 60 * 60,
    )

    app.add_exception_handler(NasApiError, nas_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "NAS Host API"}

    return app


app = create_app()

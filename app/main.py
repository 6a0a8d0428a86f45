"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.routes import health
from app.api.routes import router as api_router
from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.ratelimit import FixedWindowRateLimiter, RateLimitMiddleware, run_periodic_sweep
from app.realtime import RealtimeHub

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    sweeper = asyncio.create_task(
        run_periodic_sweep(app.state.rate_limiter, settings.RATE_LIMIT_SWEEP_INTERVAL_SECONDS)
    )
    logger.info("Residents portal API started (env=%s)", settings.APP_ENV)
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the HTTP application. Each call gets its own rate-limit table and realtime hub."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Residents Portal API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_limiter = FixedWindowRateLimiter()
    app.state.hub = RealtimeHub(cors_origins=settings.cors_origin_list or "*")

    app.add_middleware(
        RateLimitMiddleware,
        limiter=app.state.rate_limiter,
        requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix=settings.API_PREFIX)

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Residents Portal API"}

    return app


app = create_app()

# Serve with: uvicorn app.main:asgi_app  (Socket.IO lives at /socket.io)
asgi_app = app.state.hub.asgi_app(app)

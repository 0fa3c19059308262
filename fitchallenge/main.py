from __future__ import annotations
import asyncio
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fitchallenge.config import settings
from fitchallenge.logging_setup import configure_logging
from fitchallenge.state import AppState, build_state
from fitchallenge.routes.system import router as system_router
from fitchallenge.routes.participants import router as participants_router
from fitchallenge.routes.logs import router as logs_router
from fitchallenge.routes.leaderboard import router as leaderboard_router
from fitchallenge.routes.calendar import router as calendar_router
from fitchallenge.routes.events import router as events_router
import structlog

configure_logging(settings.log_level, settings.log_json)
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    app.state.fitness.recomputer.bind_loop(asyncio.get_running_loop())
    cal = app.state.fitness.calendar
    log.info(
        "startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha,
        challenge_start=cal.start_date.isoformat(), challenge_end=cal.end_date.isoformat(),
    )
    yield
    # Shutdown
    await app.state.fitness.recomputer.drain()
    log.info("shutdown")

def create_app(state: AppState | None = None) -> FastAPI:
    app = FastAPI(
        title=f"{settings.app_display_name} API",
        version=settings.app_version,
        lifespan=lifespan,
        description=f"{settings.app_display_name} API for daily logs, points and the leaderboard",
    )
    app.state.fitness = state or build_state(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router)
    app.include_router(participants_router)
    app.include_router(logs_router)
    app.include_router(leaderboard_router)
    app.include_router(calendar_router)
    app.include_router(events_router)

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        rid = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = rid
        structlog.contextvars.bind_contextvars(request_id=rid)
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        structlog.contextvars.clear_contextvars()
        return response

    return app

app = create_app()

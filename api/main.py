"""FastAPI application for the golf round tracker."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings, setup_logging
from database.connection import db
from database.db_manager import DatabaseManager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level)
    await db.initialize(settings)
    app.state.db_manager = DatabaseManager(db.pool)
    yield
    await db.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Golf Round Tracker API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import courses, drafts, rounds, schedules, stats, users
    app.include_router(drafts.router, prefix="/api/draft", tags=["draft"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])
    app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
    app.include_router(schedules.router, prefix="/api/schedules", tags=["schedules"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(courses.router, prefix="/api/courses", tags=["courses"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()

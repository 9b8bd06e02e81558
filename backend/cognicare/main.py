"""CogniCare API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CogniCareError → {"success": false, ...} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - One access-log line per request through AccessLogMiddleware
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from cognicare.api.error_handlers import register_error_handlers
from cognicare.api.routes import (
    admin,
    auth,
    catalogs,
    cognitive_variables,
    health,
    sessions,
    students,
    trainers,
    training,
    utilities,
)
from cognicare.config import get_settings
from cognicare.infrastructure.database import close_db, init_db
from cognicare.infrastructure.observability import AccessLogMiddleware, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"CogniCare API started ({settings.environment})")
    yield
    await close_db()
    logger.info("CogniCare API shutting down")


app = FastAPI(title="CogniCare API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(AccessLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes, registered explicitly
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(catalogs.router)
app.include_router(training.router)
app.include_router(students.router)
app.include_router(utilities.router)
app.include_router(trainers.router)
app.include_router(cognitive_variables.router)
app.include_router(sessions.router)


@app.get("/test", response_class=PlainTextResponse, include_in_schema=False)
async def smoke_test():
    logger.info("Smoke test request received")
    return "¡El backend está respondiendo!"

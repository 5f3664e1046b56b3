"""
FastAPI app entrypoint.

Shared availability calendar: calendars, availability slots, join/unjoin.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from joincal.api.routes import admin, availability, calendars
from joincal.config import settings
from joincal.core.errors import register_error_handlers
from joincal.core.logging_config import configure_logging
from joincal.db.session import SessionLocal
from joincal.services.calendar_service import ensure_default_calendar

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = SessionLocal()
    try:
        ensure_default_calendar(db, settings.default_calendar_id)
    finally:
        db.close()
    logger.info("Backend ready (database=%s, timezone=%s)", settings.database_url.split("@")[-1], settings.calendar_timezone)
    yield


app = FastAPI(title="Joincal", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the production frontend
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(availability.router, prefix="/api/availability", tags=["availability"])
app.include_router(calendars.router, prefix="/api/calendars", tags=["calendars"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Joincal API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}

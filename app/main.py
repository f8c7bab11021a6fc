"""
Gig Ledger - FastAPI Application

Gig bookkeeping for band managers: earnings split, money owed to the band
and period reports.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.core.config import settings
from app.core.database import engine, Base
from app.core.logging_config import configure_logging
from app.routers.gigs import router as gigs_router
from app.routers.reports import router as reports_router
from app.routers.exports import router as exports_router
from app.routers.band_members import router as band_members_router
from app.routers.notifications import router as notifications_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    configure_logging(settings.LOG_LEVEL)

    # Create tables on startup (for development)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield
    # Cleanup on shutdown
    await engine.dispose()


app = FastAPI(
    title="Gig Ledger",
    description="Gig earnings and band payouts for live-music managers",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(gigs_router)
app.include_router(reports_router)
app.include_router(exports_router)
app.include_router(band_members_router)
app.include_router(notifications_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}

"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vestri.admin.app import admin_app
from vestri.api.routes import admin, health, showtimes
from vestri.config import settings
from vestri.services.temporal import VENUE_TZ
from vestri.tasks.purge_job import run_purge_past

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: configure and start the scheduler
    scheduler = AsyncIOScheduler(timezone=VENUE_TZ)
    if settings.purge_enabled:
        scheduler.add_job(
            run_purge_past,
            trigger=CronTrigger(hour=settings.purge_hour, minute=0, timezone=VENUE_TZ),
            id="nightly_purge",
            name="Nightly purge of ended showtimes",
            replace_existing=True,
        )
        logger.info(f"Nightly purge registered for {settings.purge_hour:02d}:00")
    scheduler.start()
    logger.info("Scheduler started")

    yield

    # Shutdown: stop the scheduler gracefully
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")


# Create FastAPI app
app = FastAPI(
    title="Vestri Cinema API",
    description="Showtime listings for the Vestri cinema",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:5174",
    ],  # Frontend development server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(showtimes.router, prefix="/api", tags=["showtimes"])
app.include_router(admin.router, prefix="/api", tags=["admin"])

# Back-office UI at /manage/admin
app.mount("/manage", admin_app)

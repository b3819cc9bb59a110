# evrecharge/main.py
import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from evrecharge.config import Settings, get_settings
from evrecharge.database import Database
from evrecharge.routes import admin, advisor, bookings, stations, users
from evrecharge.services.advisor import SchedulingAdvisor
from evrecharge.services.change_feed import ChangeFeed

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Reduce verbosity of third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    app.state.database.create_all()
    logger.info("Database tables ready")
    yield
    logger.info("Application shutting down...")
    app.state.database.dispose()


def create_app(
    settings: Optional[Settings] = None,
    advisor_transport: Optional[httpx.AsyncBaseTransport] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """Build the application and the process-wide handles it shares with every request."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="EV Recharge Bunk",
        description="Find EV charging stations, book slots and get AI charging suggestions",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings.DATABASE_URL)
    app.state.change_feed = ChangeFeed()
    app.state.advisor = SchedulingAdvisor(settings, transport=advisor_transport)
    app.state.rng = rng or random.Random()

    # CORS Middleware (Adjust as needed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Registering Routers
    app.include_router(users.router)
    app.include_router(stations.router)
    app.include_router(bookings.router)
    app.include_router(advisor.router)
    app.include_router(admin.router)

    @app.get("/", tags=["Root"])
    def read_root():
        return {"message": "Welcome to EV Recharge Bunk"}

    return app


app = create_app()

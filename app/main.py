"""FastAPI application entrypoint. No business logic; only wiring, logging and lifecycle."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.database import dispose_engine
from app.core.errors import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "Identity service starting",
        extra={
            "environment": settings.APP_ENV,
            "database_url_set": bool(settings.DATABASE_URL),
            "peer_service_url_set": bool(settings.PEER_SERVICE_URL),
        },
    )
    if not settings.PEER_SERVICE_URL:
        logger.warning("PEER_SERVICE_URL is not set; user deletes will not cascade")
    yield
    dispose_engine()
    logger.info("Identity service stopped; database connections closed")


app = FastAPI(
    title="Identity Service",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(v1_router, prefix=settings.API_PREFIX)

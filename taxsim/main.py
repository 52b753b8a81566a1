"""FastAPI application for the B2B tax simulator.

Usage:
    python -m taxsim.main
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from taxsim.api.routes import router as simulation_router
from taxsim.config import settings
from taxsim.db.engine import db_lifespan

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Route stdlib logging to stdout and render structlog events on the console."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database (schema, default rate tables) for the app's lifetime."""
    logger.info(
        "Starting tax simulator (env=%s, default year=%d)",
        settings.environment,
        settings.simulator.default_tax_year,
    )
    async with db_lifespan():
        yield
    logger.info("Tax simulator stopped")


def create_app() -> FastAPI:
    """Build the application with the simulation router and health check."""
    application = FastAPI(
        title="B2B Tax Simulator API",
        description="Ryczałt / liniowy / skala comparison for Polish sole proprietors",
        version="0.1.0",
        lifespan=lifespan,
    )
    application.include_router(simulation_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {
            "status": "ok",
            "environment": settings.environment,
            "default_tax_year": str(settings.simulator.default_tax_year),
        }

    return application


configure_logging(settings.log_level)
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "taxsim.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )

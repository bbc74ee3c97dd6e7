"""Main FastAPI application for the Dark Sky forecast client."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from darksky_forecast.api.endpoints import router as forecast_router
from darksky_forecast.config import HOST, PORT, DEBUG, DARKSKY_API_KEY
from darksky_forecast.logging_config import configure_logging

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    if not DARKSKY_API_KEY:
        logger.warning("DARKSKY_API_KEY is not set; upstream requests will be rejected")
    logger.info("Starting Dark Sky Forecast Service")
    try:
        yield
    finally:
        logger.info("Shutting down Dark Sky Forecast Service")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Dark Sky Forecast Service",
        description="REST API service that serves Dark Sky forecasts in a selectable unit system",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(forecast_router)

    @app.get("/", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "Dark Sky Forecast Service",
            "docs": "/docs",
            "redoc": "/redoc",
            "forecast": "/forecast",
            "health": "/forecast/health"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()

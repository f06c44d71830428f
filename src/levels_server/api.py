"""
FastAPI backend for the Levels Server.

Stateless: every request carries its own candle slice, so concurrent
requests share nothing.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import levels_router
from .schemas import HealthResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application with all routers mounted."""
    application = FastAPI(
        title="Swing Zone Levels Server",
        description="Swing zones, swing rays and market regime for candle slices",
        version="0.1.0",
    )

    # Enable CORS for frontend
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/api/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="ok")

    application.include_router(levels_router)
    return application


app = create_app()

"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI

from tvmcalc import __version__
from tvmcalc.config import get_settings
from tvmcalc.api import router as api_router

settings = get_settings()

logging.basicConfig(level=settings.log_level)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Time value of money calculations",
    version=__version__,
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}

"""
Main application entry point - FastAPI app instance and configuration.
Run with: uvicorn infragen.main:app --reload
"""

from fastapi import FastAPI

from infragen.core.config import settings
from infragen.core.logging import configure_logging
from infragen.routers import generate

configure_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS headers are set by the generate router on every response, and its
# OPTIONS route answers all pre-flights with an empty 200.
app.include_router(generate.router)


@app.get("/health", tags=["health"])
def health_check():
    """
    Liveness probe.

    Does NOT call the AI gateway or check that its credential is set.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}

"""Main FastAPI application."""

import logging

from fastapi import FastAPI

from chapter_translator import __version__
from chapter_translator.config import settings
from chapter_translator.api.v1.routes import batches

logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.app_name,
    description="Batch novel chapter translation with LLM and Google Translate fallback",
    version=__version__,
)

# Include routers
app.include_router(batches.router, prefix="/api/v1", tags=["batches"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Chapter Translator API", "version": __version__}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}

"""
Movie Tracker API - FastAPI application.

Provides endpoints for:
- Listing the tracked movies stored in the spreadsheet
- Searching TMDb for movies to add
- Fetching merged TMDb/OMDb details for one movie
- Appending an edited movie to the spreadsheet
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import movies
from movie_tracker.utils.env import load_env

logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    Example: CORS_ALLOW_ORIGINS=http://localhost:5173,https://movies.example.com
    """
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "")
    if not origins_str:
        return []
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    env_path = load_env()
    logger.info("Starting up Movie Tracker API (env file: %s)...", env_path or "none")
    yield
    logger.info("Shutting down Movie Tracker API...")


app = FastAPI(
    title="Movie Tracker API",
    description="Search TMDb and keep a spreadsheet log of watched and to-watch movies",
    version="0.1.0",
    lifespan=lifespan,
)

# If no origins are configured, allow all origins but disable credentials
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(movies.router, prefix="/api/v1")


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "movie-tracker"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}

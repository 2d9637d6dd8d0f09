"""
API entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from civic_leaderboard.core.config import get_settings
from civic_leaderboard.database import Database

from civic_leaderboard.controllers.leaderboard_controller import router as leaderboard_router
from civic_leaderboard.controllers.description_controller import router as description_router
from civic_leaderboard.controllers.health_controller import router as health_router

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

CORS_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",")]


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect()
    yield
    await Database.disconnect()

app = FastAPI(
    title="Civic Leaderboard API",
    description="Points, badges, streaks and ranking for citizen traffic reports",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(health_router)
app.include_router(leaderboard_router)
app.include_router(description_router)


@app.get("/")
async def root():
    # Root endpoint, handy to check the API is up
    return {
        "name": "Civic Leaderboard API",
        "version": "1.0.0",
        "docs": "/docs"
    }

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.database import init_database

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="FitTrack - daily workouts, weight progress and leaderboard")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("Приложение запущено!")


@app.get("/")
async def root():
    return {
        "app": "FitTrack",
        "message": "FitTrack - daily workouts, weight progress and leaderboard",
        "links": {
            "workouts": "/api/v1/workouts",
            "stats": "/api/v1/stats",
            "leaderboard": "/api/v1/leaderboard",
            "profile": "/api/v1/profile",
            "docs": "/docs",
        }
    }

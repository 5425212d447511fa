from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.profile import router as profile_router
from app.api.v1.workouts import router as workouts_router
from app.api.v1.stats import router as stats_router
from app.api.v1.leaderboard import router as leaderboard_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(profile_router, prefix="/profile", tags=["profile"])
api_router.include_router(workouts_router, prefix="/workouts", tags=["workouts"])
api_router.include_router(stats_router, prefix="/stats", tags=["stats"])
api_router.include_router(leaderboard_router, prefix="/leaderboard", tags=["leaderboard"])

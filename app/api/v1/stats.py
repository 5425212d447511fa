import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.stats import StatsResponse
from app.services.workout_stats import WorkoutStatsCalculator

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=StatsResponse)
async def get_stats(current_user: User = Depends(get_current_user)):
    """Статистика тренировок: итоги, последние 8 недель, 6 месяцев, топ упражнений"""
    try:
        return WorkoutStatsCalculator.calculate(current_user.workouts)
    except Exception as e:
        logger.error(f"Ошибка при расчете статистики: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")

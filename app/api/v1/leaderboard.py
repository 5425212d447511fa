from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_current_user, get_user_repository
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.leaderboard import LeaderboardEntry
from app.services.progress_scorer import ProgressScorer

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    current_user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    """Рейтинг пользователей: 60% прогресс к цели по весу + 40% выполненные подходы"""
    try:
        users = await repo.list_leaderboard_candidates()
        return ProgressScorer.leaderboard(users)
    except Exception as e:
        logger.error(f"Ошибка при построении лидерборда: {e}")
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера")

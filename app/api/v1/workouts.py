from typing import Dict
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.dependencies import get_current_user
from app.core.workout_templates import get_all_workout_templates
from app.models.user import User
from app.schemas.user import UserShort
from app.schemas.workout import (
    ExerciseTemplateRead,
    TodayWorkoutResponse,
    WorkoutDayRead,
    WorkoutTemplateRead,
    WorkoutUpdate,
    WorkoutUpdateResponse,
)
from app.services.workout_service import workout_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=TodayWorkoutResponse)
async def get_today_workout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Тренировка на сегодня (создаётся из недельного шаблона при первом запросе)"""
    try:
        workout = await workout_service.get_today_workout(db, current_user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Ошибка при получении тренировки: {e}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Не удалось получить тренировку")

    return TodayWorkoutResponse(
        workout=WorkoutDayRead.model_validate(workout),
        user=UserShort.model_validate(current_user),
    )


@router.put("", response_model=WorkoutUpdateResponse)
async def update_today_workout(
    update: WorkoutUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Записать вес тела или обновить подход (повторы, вес, выполнение)"""
    try:
        await workout_service.apply_update(db, current_user, update)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Ошибка при обновлении тренировки: {e}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Не удалось обновить тренировку")

    return WorkoutUpdateResponse(success=True)


@router.get("/templates", response_model=Dict[str, WorkoutTemplateRead])
async def get_templates(current_user: User = Depends(get_current_user)):
    """Недельный шаблон тренировок"""
    return {
        day: WorkoutTemplateRead(
            title=template.title,
            exercises=[
                ExerciseTemplateRead(name=e.name, sets=e.sets, reps=e.reps_label)
                for e in template.exercises
            ],
        )
        for day, template in get_all_workout_templates().items()
    }

from datetime import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.dependencies import get_current_user
from app.schemas.profile import ProfileResponse, ProfileUpdate, ProfileUpdateResponse
from app.models.user import User
from app.services.weight_service import record_weight

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=ProfileResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Получить профиль текущего пользователя"""
    return ProfileResponse.model_validate(current_user)


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile(
        profile_update: ProfileUpdate,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db)
):
    """Обновить текущий и/или целевой вес; текущий вес попадает в историю за сегодня"""
    try:
        if profile_update.current_weight is not None:
            record_weight(current_user, profile_update.current_weight, datetime.utcnow().date())

        if profile_update.target_weight is not None:
            current_user.target_weight = profile_update.target_weight

        await db.commit()
    except Exception as e:
        logger.error(f"Ошибка при обновлении профиля: {e}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Ошибка при обновлении профиля")

    return ProfileUpdateResponse(
        message="Профиль обновлен",
        current_weight=current_user.current_weight,
        target_weight=current_user.target_weight,
    )

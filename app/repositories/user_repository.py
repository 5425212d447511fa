from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError

from app.models.user import User


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_by_email_or_user_name(self, email: str, user_name: str) -> Optional[User]:
        """Найти пользователя, занявшего email или имя (проверка при регистрации)."""
        result = await self.db.execute(
            select(User).where(or_(User.email == email.lower(), User.user_name == user_name))
        )
        return result.scalars().first()

    async def get_by_refresh_token(self, refresh_token: str) -> Optional[User]:
        """Получить пользователя по значению refresh-токена (для reuse-detection)."""
        result = await self.db.execute(
            select(User).where(User.refresh_token == refresh_token)
        )
        return result.scalar_one_or_none()

    async def list_leaderboard_candidates(self) -> List[User]:
        """Пользователи с заданными текущим и целевым весом, в порядке регистрации."""
        result = await self.db.execute(
            select(User)
            .where(User.current_weight.is_not(None), User.target_weight.is_not(None))
            .order_by(User.id)
        )
        return list(result.scalars().all())

    async def save_refresh_token(
        self,
        user: User,
        refresh_token: str,
        expires: datetime,
    ) -> None:
        user.refresh_token = refresh_token
        user.refresh_token_expires = expires
        await self.db.commit()

    async def revoke_refresh_token(self, user: User) -> None:
        """Аннулировать refresh-токен пользователя (logout или повторное использование токена)."""
        user.refresh_token = None
        user.refresh_token_expires = None
        await self.db.commit()

    async def create_user(self, user: User) -> User:
        """Сохранить пользователя. IntegrityError (занятый email или имя) пробрасывается после rollback."""
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        await self.db.refresh(user)
        return user

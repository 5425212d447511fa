from datetime import datetime, timedelta
from typing import Optional
import logging

import bcrypt
from jose import jwt, JWTError
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.models.user import User
from app.models.weight import WeightEntry
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.REFRESH_SECRET_KEY = settings.REFRESH_SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.REFRESH_TOKEN_EXPIRE_DAYS = settings.REFRESH_TOKEN_EXPIRE_DAYS

    def hash_password(self, password: str) -> str:
        # Cost 12
        hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=12))
        return hashed.decode('utf-8')  # Декодируем bytes в string для хранения в БД

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # Строка в БД не является bcrypt-хэшем
            return False

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def create_refresh_token(self, data: dict) -> str:
        to_encode = data.copy()
        expire = datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.REFRESH_SECRET_KEY, algorithm=self.ALGORITHM)

    async def issue_tokens(self, repo: UserRepository, user: User) -> dict:
        """Выдать пару токенов и сохранить refresh-токен пользователю."""
        access_token = self.create_access_token(
            data={"sub": str(user.id)},
            expires_delta=timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        refresh_token = self.create_refresh_token(data={"sub": str(user.id)})
        await repo.save_refresh_token(
            user,
            refresh_token,
            datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS),
        )
        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "token_type": "bearer",
        }

    def _refresh_subject(self, refresh_token: str) -> Optional[int]:
        try:
            payload = jwt.decode(refresh_token, self.REFRESH_SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError:
            return None
        user_id = payload.get("sub")
        return int(user_id) if user_id is not None else None

    async def rotate_refresh_token(self, repo: UserRepository, refresh_token: str) -> Optional[dict]:
        """
        Обменять refresh-токен на новую пару.

        Валидный по подписи токен, которого нет в БД, считается повторно
        использованным: токены владельца аннулируются.
        """
        user_id = self._refresh_subject(refresh_token)
        if user_id is None:
            return None

        user = await repo.get_by_refresh_token(refresh_token)
        if user is None:
            victim = await repo.get_by_id(user_id)
            if victim is not None:
                logger.warning(f"Повторное использование refresh-токена пользователя {victim.id}")
                await repo.revoke_refresh_token(victim)
            return None

        if not user.refresh_token_expires or user.refresh_token_expires <= datetime.utcnow():
            return None

        return await self.issue_tokens(repo, user)

    async def logout_user(self, repo: UserRepository, refresh_token: str) -> bool:
        user_id = self._refresh_subject(refresh_token)
        if user_id is None:
            return False

        user = await repo.get_by_id(user_id)
        if user is not None:
            await repo.revoke_refresh_token(user)
        return True

    async def authenticate_user(self, repo: UserRepository, login_data: UserLogin) -> Optional[User]:
        user = await repo.get_by_email(login_data.email)

        if not user or not self.verify_password(login_data.password, user.password):
            logger.info(f"Неудачная попытка входа: {login_data.email}")
            return None

        return user

    @staticmethod
    def _user_exists() -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Пользователь с таким email или именем уже существует",
        )

    async def register_user(self, repo: UserRepository, user_data: UserRegister) -> User:
        existing_user = await repo.get_by_email_or_user_name(user_data.email, user_data.user_name)
        if existing_user:
            raise self._user_exists()

        now = datetime.utcnow()
        weight_history = []
        if user_data.current_weight:
            weight_history.append(WeightEntry(date=now.date(), weight=user_data.current_weight))

        new_user = User(
            user_name=user_data.user_name,
            email=user_data.email,
            password=self.hash_password(user_data.password),
            current_weight=user_data.current_weight or None,
            target_weight=user_data.target_weight or None,
            weight_history=weight_history,
            workouts=[],
            created_at=now,
        )

        try:
            created = await repo.create_user(new_user)
        except IntegrityError:
            # Параллельная регистрация успела занять email или имя
            logger.info(f"Конфликт уникальности при регистрации: {user_data.email}")
            raise self._user_exists()
        logger.info(f"Зарегистрирован пользователь {created.user_name} (ID: {created.id})")
        return created


# Создаем экземпляр сервиса для импорта
auth_service = AuthService()

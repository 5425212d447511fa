"""
Общие фикстуры для всех тестов FitTrack backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- UserRepository заменяется на AsyncMock (mock_repo) во всех тестах auth и лидерборда.
- Для эндпоинтов с прямым доступом к сессии (workouts, profile)
  зависимость get_db заменяется на mock_db, а get_current_user на лямбду с нужным пользователем.
- Пользователи и тренировки: transient-объекты ORM, коллекции заполняются списками.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import date, datetime, timedelta
from typing import AsyncGenerator, List, Optional

from app.api.router import api_router
from app.models.user import User
from app.models.weight import WeightEntry
from app.models.workout import DayOfWeekEnum, WorkoutDay, WorkoutExercise, WorkoutSet
from app.core.dates import day_name
from app.services.auth_service import auth_service
from app.repositories.user_repository import UserRepository
from app.core.dependencies import get_current_user, get_user_repository
from app.core.db import get_db


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="FitTrack Test App")
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_auth_headers(user: User) -> dict:
    """Создать заголовки авторизации с валидным JWT для указанного пользователя."""
    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {access_token}"}


def make_workout(
    on_date: date,
    sets_completed: int = 0,
    sets_planned: int = 0,
    title: str = "Legs",
    exercises: Optional[List[WorkoutExercise]] = None,
) -> WorkoutDay:
    return WorkoutDay(
        date=on_date,
        day_of_week=DayOfWeekEnum(day_name(on_date)),
        title=title,
        exercises=exercises or [],
        completed=sets_planned > 0 and sets_completed == sets_planned,
        total_sets_completed=sets_completed,
        total_sets_planned=sets_planned,
    )


def make_exercise(name: str, completed_flags: List[bool], position: int = 0) -> WorkoutExercise:
    return WorkoutExercise(
        position=position,
        name=name,
        sets=[
            WorkoutSet(set_number=number, reps=10, weight=None, completed=flag)
            for number, flag in enumerate(completed_flags, start=1)
        ],
    )


def make_user(
    user_id: int = 1,
    user_name: str = "tester",
    weights: Optional[List[float]] = None,
    current_weight: Optional[float] = None,
    target_weight: Optional[float] = None,
    workouts: Optional[List[WorkoutDay]] = None,
    created_at: Optional[datetime] = None,
) -> User:
    """Пользователь с историей веса: weights[i] записан i дней спустя после первой записи."""
    weights = weights or []
    start = date(2026, 1, 1)
    history = [
        WeightEntry(date=start + timedelta(days=i), weight=weight)
        for i, weight in enumerate(weights)
    ]
    if current_weight is None and weights:
        current_weight = weights[-1]
    return User(
        id=user_id,
        user_name=user_name,
        email=f"{user_name}@example.com",
        password="hashed",
        current_weight=current_weight,
        target_weight=target_weight,
        weight_history=history,
        workouts=workouts or [],
        created_at=created_at or datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Обычный пользователь с целью по весу и без тренировок."""
    user = make_user(user_id=1, user_name="tester", weights=[200.0], target_weight=180.0)
    user.email = "test@example.com"
    user.password = auth_service.hash_password("password123")
    return user


# ---------------------------------------------------------------------------
# Фикстуры для зависимостей
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository для auth-эндпоинтов и лидерборда."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_db() -> MagicMock:
    """
    Мокированная сессия БД для эндпоинтов, использующих get_db напрямую.
    commit/rollback/refresh корутины, add обычный вызов.
    """
    session = AsyncMock()
    session.add = MagicMock()
    default_result = MagicMock()
    default_result.scalar_one_or_none.return_value = None
    default_result.scalars.return_value.all.return_value = []
    session.execute.return_value = default_result
    return session


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_repo) -> AsyncGenerator[AsyncClient, None]:
    """
    Базовый клиент: get_user_repository → mock_repo.
    Используется для auth-эндпоинтов (register, login, refresh, logout, me).
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(user_fixture, mock_repo, mock_db) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как обычный пользователь.
    get_current_user → user_fixture, get_db → mock_db.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_current_user] = lambda: user_fixture
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

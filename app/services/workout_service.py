from datetime import date, datetime
from typing import Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dates import day_name
from app.core.workout_templates import WorkoutTemplate, get_workout_template
from app.models.user import User
from app.models.workout import DayOfWeekEnum, WorkoutDay, WorkoutExercise, WorkoutSet
from app.schemas.workout import WorkoutUpdate
from app.services.weight_service import record_weight

logger = logging.getLogger(__name__)


class WorkoutService:

    @staticmethod
    def find_workout(user: User, on_date: date) -> Optional[WorkoutDay]:
        for workout in user.workouts:
            if workout.date == on_date:
                return workout
        return None

    @staticmethod
    def build_from_template(template: WorkoutTemplate, on_date: date) -> WorkoutDay:
        exercises = [
            WorkoutExercise(
                position=position,
                name=exercise.name,
                sets=[
                    WorkoutSet(set_number=number, reps=reps, weight=None, completed=False)
                    for number, reps in exercise.default_sets
                ],
            )
            for position, exercise in enumerate(template.exercises)
        ]
        return WorkoutDay(
            date=on_date,
            day_of_week=DayOfWeekEnum(day_name(on_date)),
            title=template.title,
            exercises=exercises,
            completed=False,
            total_sets_completed=0,
            total_sets_planned=template.total_sets,
        )

    @staticmethod
    def refresh_totals(workout: WorkoutDay) -> None:
        """Пересчитать счётчики подходов по фактическим подходам."""
        all_sets = [s for exercise in workout.exercises for s in exercise.sets]
        workout.total_sets_planned = len(all_sets)
        workout.total_sets_completed = sum(1 for s in all_sets if s.completed)
        workout.completed = bool(all_sets) and workout.total_sets_completed == workout.total_sets_planned

    async def get_today_workout(
        self,
        db: AsyncSession,
        user: User,
        today: Optional[date] = None,
    ) -> WorkoutDay:
        """Тренировка на сегодня; если её нет, создаётся из недельного шаблона."""
        today = today or datetime.utcnow().date()
        template = get_workout_template(day_name(today))
        workout = self.find_workout(user, today)

        if workout is not None:
            if not workout.title and template:
                workout.title = template.title
                await db.commit()
            return workout

        if template is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Шаблон тренировки на сегодня не найден",
            )

        workout = self.build_from_template(template, today)
        user.workouts.append(workout)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Повторное создание тренировки {today} для пользователя {user.id}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Тренировка на эту дату уже существует",
            )

        logger.info(f"Создана тренировка '{workout.title}' на {today} для пользователя {user.id}")
        return workout

    async def record_body_weight(
        self,
        db: AsyncSession,
        user: User,
        body_weight: float,
        today: Optional[date] = None,
    ) -> WorkoutDay:
        today = today or datetime.utcnow().date()
        workout = self.find_workout(user, today)
        if workout is None:
            raise HTTPException(status_code=404, detail="Тренировка не найдена")

        workout.body_weight = body_weight
        record_weight(user, body_weight, today)
        await db.commit()
        return workout

    async def update_set(
        self,
        db: AsyncSession,
        user: User,
        update: WorkoutUpdate,
        today: Optional[date] = None,
    ) -> WorkoutSet:
        if not update.exercise_name or not update.set_number:
            raise HTTPException(status_code=400, detail="Не заполнены обязательные поля")

        today = today or datetime.utcnow().date()
        workout = self.find_workout(user, today)
        if workout is None:
            raise HTTPException(status_code=404, detail="Тренировка не найдена")

        exercise = next((e for e in workout.exercises if e.name == update.exercise_name), None)
        if exercise is None:
            raise HTTPException(status_code=404, detail="Упражнение не найдено")

        workout_set = next((s for s in exercise.sets if s.set_number == update.set_number), None)
        if workout_set is None:
            raise HTTPException(status_code=404, detail="Подход не найден")

        if update.reps is not None:
            workout_set.reps = update.reps
        # Явный null очищает вес подхода, отсутствующее поле его не трогает
        if "weight" in update.model_fields_set:
            workout_set.weight = update.weight
        if update.completed is not None:
            workout_set.completed = update.completed

        self.refresh_totals(workout)
        await db.commit()
        return workout_set

    async def apply_update(
        self,
        db: AsyncSession,
        user: User,
        update: WorkoutUpdate,
        today: Optional[date] = None,
    ) -> None:
        """PUT тренировки дня: вес тела либо изменение подхода."""
        if update.body_weight is not None:
            await self.record_body_weight(db, user, update.body_weight, today)
        else:
            await self.update_set(db, user, update, today)


workout_service = WorkoutService()

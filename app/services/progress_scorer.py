"""
Расчёт прогресса и рейтинга пользователей для лидерборда.

Чистые вычисления над уже загруженными данными пользователя: история веса,
целевой вес, тренировки с накопленными счётчиками подходов. Ничего не
сохраняет между вызовами и не изменяет входные объекты.
"""
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from app.core.dates import parse_calendar_date
from app.schemas.leaderboard import LeaderboardEntry

PROGRESS_WEIGHT = 0.6
COMPLETION_WEIGHT = 0.4


class ScoringInputError(ValueError):
    """Запись пользователя нарушает контракт входных данных (ошибка программиста)."""


class ProgressScorer:

    @classmethod
    def is_eligible(cls, record) -> bool:
        return record.current_weight is not None and record.target_weight is not None

    @classmethod
    def resolve_weights(cls, record) -> Tuple[float, float]:
        """(стартовый вес, текущий вес): первая и последняя запись истории, иначе current_weight."""
        history = record.weight_history or []
        if history:
            starting, current = history[0].weight, history[-1].weight
        else:
            starting = current = record.current_weight

        if starting is None or current is None:
            raise ScoringInputError(f"У пользователя {record.user_name} нет данных о весе")
        if starting < 0 or current < 0:
            raise ScoringInputError(f"Отрицательный вес у пользователя {record.user_name}")
        return starting, current

    @classmethod
    def progress_to_goal(cls, starting: float, current: float, target: float) -> float:
        total_change_needed = starting - target
        if total_change_needed == 0:
            return 100.0

        actual_change = current - starting
        if current - target > 0:
            # Снижение веса: доля пройденного пути от старта к цели
            progress = -actual_change / total_change_needed * 100
        else:
            progress = abs(actual_change) / abs(total_change_needed) * 100
        return max(0.0, min(100.0, progress))

    @classmethod
    def goal_reached(cls, starting: float, current: float, target: float) -> bool:
        if starting >= target:
            return current <= target
        return current >= target

    @classmethod
    def completion_rate(cls, completed: int, planned: int) -> float:
        if planned <= 0:
            return 0.0
        return completed / planned * 100

    @classmethod
    def sort_by_date_desc(cls, workouts: Iterable) -> List[Tuple[date, object]]:
        dated = []
        for workout in workouts:
            try:
                dated.append((parse_calendar_date(workout.date), workout))
            except ValueError as e:
                raise ScoringInputError(str(e)) from e
        # sorted стабилен и при reverse=True: тренировки с одной датой сохраняют исходный порядок
        return sorted(dated, key=lambda item: item[0], reverse=True)

    @classmethod
    def current_streak(cls, workout_dates: Sequence[date], today: date) -> int:
        """
        Серия дней подряд с тренировками, от самой свежей назад.

        Разница 0 или 1 день с ожидаемой датой продолжает серию (несколько записей
        за один день тоже засчитываются), первый разрыв больше дня её обрывает.
        """
        streak = 0
        expected = today
        for workout_date in workout_dates:
            days_diff = (expected - workout_date).days
            if days_diff in (0, 1):
                streak += 1
                expected = workout_date
            else:
                break
        return streak

    @classmethod
    def user_metrics(cls, record, now: Optional[datetime] = None) -> LeaderboardEntry:
        now = now or datetime.utcnow()
        today = now.date()

        if record.target_weight is None:
            raise ScoringInputError(f"У пользователя {record.user_name} не задан целевой вес")
        target = record.target_weight

        starting, current = cls.resolve_weights(record)
        weight_difference = current - target

        workouts = list(record.workouts or [])
        total_workouts = len(workouts)
        total_sets_completed = sum(w.total_sets_completed or 0 for w in workouts)
        total_sets_planned = sum(w.total_sets_planned or 0 for w in workouts)
        completion = cls.completion_rate(total_sets_completed, total_sets_planned)

        days_since_joining = (now - record.created_at).days if record.created_at else 0
        weeks_since_joining = max(1, days_since_joining // 7)

        sorted_workouts = cls.sort_by_date_desc(workouts)
        last_date, last_workout = sorted_workouts[0] if sorted_workouts else (None, None)

        history = record.weight_history or []
        weight_change_from_last = None
        if len(history) >= 2:
            weight_change_from_last = history[-1].weight - history[-2].weight

        progress = cls.progress_to_goal(starting, current, target)

        return LeaderboardEntry(
            user_name=record.user_name,
            current_weight=current,
            target_weight=target,
            current_weight_from_history=current,
            starting_weight=starting,
            weight_difference=abs(weight_difference),
            is_losing_weight=weight_difference > 0,
            actual_weight_change=current - starting,
            total_weight_change_needed=starting - target,
            progress_to_goal=progress,
            goal_reached=cls.goal_reached(starting, current, target),
            total_workouts=total_workouts,
            total_sets_completed=total_sets_completed,
            total_sets_planned=total_sets_planned,
            workout_completion_rate=completion,
            days_since_joining=days_since_joining,
            average_workouts_per_week=total_workouts / weeks_since_joining,
            last_workout_date=last_date.isoformat() if last_date else None,
            last_workout_title=last_workout.title if last_workout is not None else None,
            last_workout_sets_completed=(
                last_workout.total_sets_completed or 0 if last_workout is not None else None
            ),
            days_since_last_workout=(today - last_date).days if last_date else None,
            weight_change_from_last_workout=weight_change_from_last,
            current_streak=cls.current_streak([d for d, _ in sorted_workouts], today),
            combined_score=progress * PROGRESS_WEIGHT + completion * COMPLETION_WEIGHT,
        )

    @classmethod
    def leaderboard(cls, records: Iterable, now: Optional[datetime] = None) -> List[LeaderboardEntry]:
        """Метрики всех подходящих пользователей, по убыванию combined_score, rank с 1."""
        now = now or datetime.utcnow()
        entries = [cls.user_metrics(record, now) for record in records if cls.is_eligible(record)]
        entries.sort(key=lambda entry: entry.combined_score, reverse=True)
        return [
            entry.model_copy(update={"rank": position})
            for position, entry in enumerate(entries, start=1)
        ]

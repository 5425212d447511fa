from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from app.core.dates import parse_calendar_date
from app.schemas.stats import ExerciseStat, MonthlyTrend, StatsResponse, WeeklyData


class WorkoutStatsCalculator:
    WEEKS = 8
    MONTHS = 6
    TOP_EXERCISES = 10

    @classmethod
    def weekly_data(cls, workouts: List, today: date) -> List[WeeklyData]:
        result = []
        for i in range(cls.WEEKS - 1, -1, -1):
            week_start = today - timedelta(days=i * 7)
            week_end = week_start + timedelta(days=6)
            week_workouts = [w for w in workouts if week_start <= parse_calendar_date(w.date) <= week_end]
            result.append(WeeklyData(
                week=f"Week {cls.WEEKS - i}",
                workouts=len(week_workouts),
                sets_completed=sum(w.total_sets_completed or 0 for w in week_workouts),
            ))
        return result

    @classmethod
    def monthly_trends(cls, workouts: List, today: date) -> List[MonthlyTrend]:
        result = []
        for i in range(cls.MONTHS - 1, -1, -1):
            # Сдвиг на i календарных месяцев назад
            month_index = today.year * 12 + today.month - 1 - i
            year, month = divmod(month_index, 12)
            month_start = date(year, month + 1, 1)

            month_workouts = [
                w for w in workouts
                if parse_calendar_date(w.date).replace(day=1) == month_start
            ]
            result.append(MonthlyTrend(
                month=month_start.strftime("%b %Y"),
                workouts=len(month_workouts),
                sets_completed=sum(w.total_sets_completed or 0 for w in month_workouts),
            ))
        return result

    @classmethod
    def exercise_data(cls, workouts: Iterable) -> List[ExerciseStat]:
        totals: Dict[str, List[int]] = {}
        for workout in workouts:
            for exercise in workout.exercises or []:
                counters = totals.setdefault(exercise.name, [0, 0])
                for workout_set in exercise.sets or []:
                    counters[0] += 1
                    if workout_set.completed:
                        counters[1] += 1

        stats = [
            ExerciseStat(
                name=name,
                total_sets=total,
                completion_rate=(completed / total * 100) if total > 0 else 0.0,
            )
            for name, (total, completed) in totals.items()
        ]
        stats.sort(key=lambda item: item.total_sets, reverse=True)
        return stats[:cls.TOP_EXERCISES]

    @classmethod
    def calculate(cls, workouts: Iterable, today: Optional[date] = None) -> StatsResponse:
        """Сводная статистика тренировок пользователя за всё время."""
        today = today or datetime.utcnow().date()
        workouts = list(workouts or [])

        total_workouts = len(workouts)
        total_sets_completed = sum(w.total_sets_completed or 0 for w in workouts)
        total_sets_planned = sum(w.total_sets_planned or 0 for w in workouts)

        return StatsResponse(
            total_workouts=total_workouts,
            total_sets_completed=total_sets_completed,
            average_sets_per_workout=total_sets_completed / total_workouts if total_workouts > 0 else 0.0,
            completion_rate=total_sets_completed / total_sets_planned * 100 if total_sets_planned > 0 else 0.0,
            weekly_data=cls.weekly_data(workouts, today),
            exercise_data=cls.exercise_data(workouts),
            monthly_trends=cls.monthly_trends(workouts, today),
        )

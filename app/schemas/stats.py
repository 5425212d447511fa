from typing import List

from app.schemas.base import CamelModel

class WeeklyData(CamelModel):
    week: str
    workouts: int
    sets_completed: int

class MonthlyTrend(CamelModel):
    month: str
    workouts: int
    sets_completed: int

class ExerciseStat(CamelModel):
    name: str
    total_sets: int
    completion_rate: float

class StatsResponse(CamelModel):
    total_workouts: int
    total_sets_completed: int
    average_sets_per_workout: float
    completion_rate: float
    weekly_data: List[WeeklyData]
    exercise_data: List[ExerciseStat]
    monthly_trends: List[MonthlyTrend]

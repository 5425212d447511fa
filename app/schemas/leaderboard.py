from typing import Optional

from app.schemas.base import CamelModel

class LeaderboardEntry(CamelModel):
    """Производные метрики пользователя для лидерборда. Вес в фунтах, проценты 0-100."""
    user_name: str
    current_weight: float
    target_weight: float
    current_weight_from_history: float
    starting_weight: float
    weight_difference: float
    is_losing_weight: bool
    actual_weight_change: float
    total_weight_change_needed: float
    progress_to_goal: float
    goal_reached: bool
    total_workouts: int
    total_sets_completed: int
    total_sets_planned: int
    workout_completion_rate: float
    days_since_joining: int
    average_workouts_per_week: float
    last_workout_date: Optional[str] = None
    last_workout_title: Optional[str] = None
    last_workout_sets_completed: Optional[int] = None
    days_since_last_workout: Optional[int] = None
    weight_change_from_last_workout: Optional[float] = None
    current_streak: int
    combined_score: float
    rank: Optional[int] = None

from app.models.user import User
from app.models.workout import WorkoutDay, WorkoutExercise, WorkoutSet, DayOfWeekEnum
from app.models.weight import WeightEntry

__all__ = [
    "User",
    "WorkoutDay", "WorkoutExercise", "WorkoutSet", "DayOfWeekEnum",
    "WeightEntry",
]

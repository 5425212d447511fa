import datetime
from typing import List, Optional

from pydantic import Field

from app.models.workout import DayOfWeekEnum
from app.schemas.base import CamelModel
from app.schemas.user import UserShort

class WorkoutSetRead(CamelModel):
    set_number: int
    reps: int
    weight: Optional[float] = None
    completed: bool = False

class WorkoutExerciseRead(CamelModel):
    name: str
    sets: List[WorkoutSetRead] = []

class WorkoutDayRead(CamelModel):
    id: Optional[int] = None
    date: datetime.date
    day_of_week: DayOfWeekEnum
    title: str
    exercises: List[WorkoutExerciseRead] = []
    completed: bool = False
    total_sets_completed: int = 0
    total_sets_planned: int = 0
    workout_duration: Optional[int] = None
    notes: Optional[str] = None
    body_weight: Optional[float] = None

class TodayWorkoutResponse(CamelModel):
    workout: WorkoutDayRead
    user: UserShort

class WorkoutUpdate(CamelModel):
    """Либо вес тела (body_weight), либо обновление подхода (exercise_name + set_number)."""
    exercise_name: Optional[str] = None
    set_number: Optional[int] = Field(default=None, ge=1)
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    completed: Optional[bool] = None
    body_weight: Optional[float] = Field(default=None, ge=0)

class WorkoutUpdateResponse(CamelModel):
    success: bool

class ExerciseTemplateRead(CamelModel):
    name: str
    sets: int
    reps: str

class WorkoutTemplateRead(CamelModel):
    title: str
    exercises: List[ExerciseTemplateRead]

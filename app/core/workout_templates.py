"""
Недельный шаблон тренировок: одна каноническая тренировка на каждый день недели.
Данные статические и неизменяемые, на их основе генерируется тренировка дня.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ExerciseTemplate:
    name: str
    sets: int
    reps_label: str
    default_reps: int

    @property
    def default_sets(self) -> Tuple[Tuple[int, int], ...]:
        """Пары (номер подхода, повторения) для новой тренировки."""
        return tuple((number, self.default_reps) for number in range(1, self.sets + 1))


@dataclass(frozen=True)
class WorkoutTemplate:
    title: str
    exercises: Tuple[ExerciseTemplate, ...]

    @property
    def total_sets(self) -> int:
        return sum(exercise.sets for exercise in self.exercises)


WORKOUT_TEMPLATES: Mapping[str, WorkoutTemplate] = MappingProxyType({
    "Monday": WorkoutTemplate(
        title="Chest & Triceps",
        exercises=(
            ExerciseTemplate("Bench Press", 4, "8-10", 8),
            ExerciseTemplate("Incline Dumbbell Press", 3, "10-12", 10),
            ExerciseTemplate("Cable Fly", 3, "12-15", 12),
            ExerciseTemplate("Tricep Pushdown", 3, "10-12", 10),
            ExerciseTemplate("Overhead Tricep Extension", 3, "10-12", 10),
        ),
    ),
    "Tuesday": WorkoutTemplate(
        title="Back & Biceps",
        exercises=(
            ExerciseTemplate("Deadlift", 4, "5-6", 5),
            ExerciseTemplate("Pull-Ups", 3, "8-10", 8),
            ExerciseTemplate("Barbell Row", 3, "8-10", 8),
            ExerciseTemplate("Barbell Curl", 3, "10-12", 10),
            ExerciseTemplate("Hammer Curl", 3, "10-12", 10),
        ),
    ),
    "Wednesday": WorkoutTemplate(
        title="Legs",
        exercises=(
            ExerciseTemplate("Back Squat", 4, "6-8", 6),
            ExerciseTemplate("Romanian Deadlift", 3, "8-10", 8),
            ExerciseTemplate("Leg Press", 3, "10-12", 10),
            ExerciseTemplate("Walking Lunges", 3, "12 each leg", 12),
            ExerciseTemplate("Standing Calf Raise", 4, "12-15", 12),
        ),
    ),
    "Thursday": WorkoutTemplate(
        title="Shoulders & Core",
        exercises=(
            ExerciseTemplate("Overhead Press", 4, "6-8", 6),
            ExerciseTemplate("Lateral Raise", 3, "12-15", 12),
            ExerciseTemplate("Rear Delt Fly", 3, "12-15", 12),
            ExerciseTemplate("Hanging Leg Raise", 3, "10-12", 10),
            ExerciseTemplate("Plank (seconds)", 3, "45-60", 45),
        ),
    ),
    "Friday": WorkoutTemplate(
        title="Full Body Strength",
        exercises=(
            ExerciseTemplate("Front Squat", 3, "6-8", 6),
            ExerciseTemplate("Weighted Dips", 3, "8-10", 8),
            ExerciseTemplate("Chin-Ups", 3, "8-10", 8),
            ExerciseTemplate("Dumbbell Shoulder Press", 3, "10-12", 10),
        ),
    ),
    "Saturday": WorkoutTemplate(
        title="Conditioning",
        exercises=(
            ExerciseTemplate("Kettlebell Swing", 4, "15-20", 15),
            ExerciseTemplate("Burpees", 3, "12-15", 12),
            ExerciseTemplate("Box Jumps", 3, "10", 10),
            ExerciseTemplate("Mountain Climbers", 3, "20 each leg", 20),
        ),
    ),
    "Sunday": WorkoutTemplate(
        title="Active Recovery",
        exercises=(
            ExerciseTemplate("Brisk Walk (minutes)", 1, "30", 30),
            ExerciseTemplate("Bodyweight Squat", 2, "15", 15),
            ExerciseTemplate("Glute Bridge", 2, "15", 15),
        ),
    ),
})


def get_workout_template(day_of_week: str) -> Optional[WorkoutTemplate]:
    return WORKOUT_TEMPLATES.get(day_of_week)


def get_all_workout_templates() -> Mapping[str, WorkoutTemplate]:
    return WORKOUT_TEMPLATES

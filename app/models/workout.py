import enum
from sqlalchemy import (
    Column, Integer, String, Date, ForeignKey, Boolean, Float, Enum, UniqueConstraint
)
from sqlalchemy.orm import relationship
from app.core.base import Base

class DayOfWeekEnum(str, enum.Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"
    sunday = "Sunday"

class WorkoutDay(Base):
    __tablename__ = "workout_days"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_workout_days_user_date"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    day_of_week = Column(Enum(DayOfWeekEnum), nullable=False)
    title = Column(String, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    total_sets_completed = Column(Integer, default=0, nullable=False)
    total_sets_planned = Column(Integer, default=0, nullable=False)
    workout_duration = Column(Integer, nullable=True)  # в минутах
    notes = Column(String(1000), nullable=True)
    body_weight = Column(Float, nullable=True)

    user = relationship("User", back_populates="workouts")
    exercises = relationship(
        "WorkoutExercise",
        back_populates="workout_day",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.position",
        lazy="selectin",
    )

class WorkoutExercise(Base):
    __tablename__ = "workout_exercises"

    id = Column(Integer, primary_key=True)
    workout_day_id = Column(Integer, ForeignKey("workout_days.id"), nullable=False, index=True)
    position = Column(Integer, default=0, nullable=False)
    name = Column(String, nullable=False)

    workout_day = relationship("WorkoutDay", back_populates="exercises")
    sets = relationship(
        "WorkoutSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.set_number",
        lazy="selectin",
    )

class WorkoutSet(Base):
    __tablename__ = "workout_sets"

    id = Column(Integer, primary_key=True)
    exercise_id = Column(Integer, ForeignKey("workout_exercises.id"), nullable=False, index=True)
    set_number = Column(Integer, nullable=False)
    reps = Column(Integer, default=0, nullable=False)
    weight = Column(Float, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)

    exercise = relationship("WorkoutExercise", back_populates="sets")

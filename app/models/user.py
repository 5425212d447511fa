from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.orm import relationship
from app.core.base import Base
from datetime import datetime

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    user_name = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    current_weight = Column(Float, nullable=True)
    target_weight = Column(Float, nullable=True)
    refresh_token = Column(String, nullable=True)
    refresh_token_expires = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Документ пользователя небольшой, поэтому коллекции грузятся сразу (selectin)
    workouts = relationship(
        "WorkoutDay",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WorkoutDay.id",
        lazy="selectin",
    )
    weight_history = relationship(
        "WeightEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WeightEntry.id",
        lazy="selectin",
    )

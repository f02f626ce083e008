# app/persistence/models.py
# -*- coding: utf-8 -*-
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text, Date, DateTime, Boolean, ForeignKey, UniqueConstraint, func
import datetime as dt

class Base(DeclarativeBase):
    pass

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(120), nullable=True)

    # Modifiés uniquement par le moteur de streak (invariant : best_streak >= current_streak)
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    best_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_streak_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    due_time: Mapped[str | None] = mapped_column(String(5), nullable=True)  # "HH:MM"
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

# --- Entraînement ------------------------------------------------------------

class WorkoutType(Base):
    __tablename__ = "workout_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    is_weekly: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    max_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

    exercises = relationship(
        "Exercise", back_populates="workout_type", cascade="all, delete-orphan",
        lazy="selectin", order_by="Exercise.order_index",
    )

class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_type_id: Mapped[int] = mapped_column(ForeignKey("workout_types.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration: Mapped[str | None] = mapped_column(String(64), nullable=True)  # "30 sec", "5 min"
    day_of_week: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0=dimanche..6=samedi, NULL = tous les jours
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

    workout_type = relationship("WorkoutType", back_populates="exercises")

class WorkoutLog(Base):
    __tablename__ = "workout_logs"
    __table_args__ = (UniqueConstraint("user_id", "date", "exercise_id", name="uq_workout_log"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

# --- Mental --------------------------------------------------------------------

class MindExercise(Base):
    __tablename__ = "mind_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)  # "HH:MM"
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

class MindExerciseLog(Base):
    __tablename__ = "mind_exercise_logs"
    __table_args__ = (UniqueConstraint("user_id", "date", "mind_exercise_id", name="uq_mind_log"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    mind_exercise_id: Mapped[int] = mapped_column(ForeignKey("mind_exercises.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

# --- Routines ------------------------------------------------------------------

class Routine(Base):
    __tablename__ = "routines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)  # morning | night | weekly
    day_of_week: Mapped[int | None] = mapped_column(Integer, nullable=True)  # routines hebdo uniquement
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

class RoutineLog(Base):
    __tablename__ = "routine_logs"
    __table_args__ = (UniqueConstraint("user_id", "date", "routine_id", name="uq_routine_log"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    routine_id: Mapped[int] = mapped_column(ForeignKey("routines.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

# --- Objectifs de développement ------------------------------------------------

class DevGoal(Base):
    __tablename__ = "dev_goals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)  # daily | weekly | monthly | yearly
    target_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    current_hours: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

class DevGoalLog(Base):
    __tablename__ = "dev_goal_logs"
    __table_args__ = (UniqueConstraint("user_id", "date", "dev_goal_id", name="uq_dev_goal_log"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    dev_goal_id: Mapped[int] = mapped_column(ForeignKey("dev_goals.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    hours_spent: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

# --- Journaliers (1 ligne par utilisateur et par jour) --------------------------

class WaterIntake(Base):
    __tablename__ = "water_intake"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_water_user_day"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, default=0, nullable=False)  # ml
    target: Mapped[int] = mapped_column(Integer, default=3000, nullable=False)  # ml
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

class DailyPerformance(Base):
    """Cache recalculable : jamais source de vérité."""
    __tablename__ = "daily_performance"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_performance_user_day"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)

    tasks_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    workout_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    mind_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    routine_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    dev_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    overall_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

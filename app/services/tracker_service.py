# app/services/tracker_service.py
# -*- coding: utf-8 -*-
"""
Opérations de mutation du tracker (ce qu'appellent l'UI et les scripts).

Chaque mutation : validation -> écriture -> recalcul de la journée.
L'écriture fait foi ; le recalcul est « best effort » : en cas de StoreError il
est journalisé et la mutation n'est pas annulée (la performance reste recalculable).
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from app.config import DEFAULT_EMAIL
from app.errors import NotFoundError, StoreError, ValidationError
from app.persistence.dates import normalize_date
from app.services.score_engine import DEV_GOAL_TYPES, ROUTINE_TYPES

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")


class _Checks:
    """Accumule les erreurs de validation puis les lève d'un bloc."""

    def __init__(self) -> None:
        self.errors: list[str] = []

    def text(self, name: str, value) -> None:
        if not isinstance(value, str) or not value.strip():
            self.errors.append(f"{name} obligatoire")

    def hhmm(self, name: str, value, required: bool = True) -> None:
        if value is None and not required:
            return
        if not isinstance(value, str) or not _HHMM.match(value.strip()):
            self.errors.append(f"{name} invalide: {value!r} (attendu HH:MM)")

    def non_negative(self, name: str, value, required: bool = False) -> None:
        if value is None and not required:
            return
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            self.errors.append(f"{name} doit être un entier >= 0 (reçu {value!r})")

    def day_of_week(self, name: str, value) -> None:
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, int) or not (0 <= value <= 6):
            self.errors.append(f"{name} hors bornes: {value!r} (attendu 0..6)")

    def choice(self, name: str, value, allowed) -> None:
        if value not in allowed:
            self.errors.append(f"{name} invalide: {value!r} (attendu {', '.join(allowed)})")

    def raise_if_any(self) -> None:
        if self.errors:
            raise ValidationError("; ".join(self.errors))


class TrackerService:
    def __init__(self, store, recalculator) -> None:
        self.store = store
        self.recalculator = recalculator

    # ------------------------------------------------------------------
    # Utilitaires
    # ------------------------------------------------------------------

    def _recalculate(self, user_id: int, date):
        try:
            return self.recalculator.recalculate_day(user_id, date)
        except StoreError:
            logger.exception("Recalcul de la performance échoué (user=%s, date=%s)", user_id, date)
            return None

    def ensure_user(self, email: str = DEFAULT_EMAIL, first_name: str | None = None, last_name: str | None = None):
        """Utilisateur créé au premier accès."""
        c = _Checks()
        c.text("email", email)
        c.raise_if_any()
        return self.store.users.get_or_create(email, first_name=first_name, last_name=last_name)

    # ------------------------------------------------------------------
    # Tâches
    # ------------------------------------------------------------------

    def add_task(self, user_id: int, date, title: str, due_time: Optional[str] = None):
        c = _Checks()
        c.text("title", title)
        c.hhmm("due_time", due_time, required=False)
        c.raise_if_any()
        day = normalize_date(date)
        task = self.store.tasks.add(user_id, day, title.strip(), due_time=due_time)
        self._recalculate(user_id, day)
        return task

    def update_task(self, task_id: int, **fields):
        c = _Checks()
        if "title" in fields:
            c.text("title", fields["title"])
        if "due_time" in fields:
            c.hhmm("due_time", fields["due_time"], required=False)
        c.raise_if_any()
        previous = self.store.tasks.get(task_id) if "date" in fields else None
        task = self.store.tasks.update(task_id, **fields)
        self._recalculate(task.user_id, task.date)
        if previous is not None and previous.date != task.date:
            self._recalculate(previous.user_id, previous.date)
        return task

    def set_task_completed(self, task_id: int, completed: bool):
        return self.update_task(task_id, completed=bool(completed))

    def delete_task(self, task_id: int) -> None:
        task = self.store.tasks.get(task_id)
        if task is None or not self.store.tasks.delete(task_id):
            raise NotFoundError(f"Tâche introuvable: {task_id}")
        self._recalculate(task.user_id, task.date)

    # ------------------------------------------------------------------
    # Entraînement
    # ------------------------------------------------------------------

    def create_workout_plan(self, user_id: int, name: str, is_weekly: bool = True, max_time: Optional[int] = None):
        c = _Checks()
        c.text("name", name)
        c.non_negative("max_time", max_time)
        c.raise_if_any()
        return self.store.workout_plans.create_plan(user_id, name.strip(), is_weekly=is_weekly, max_time=max_time)

    def add_exercise(self, workout_type_id: int, name: str, *, sets: Optional[int] = None, reps: Optional[int] = None,
                     duration: Optional[str] = None, day_of_week: Optional[int] = None, order_index: int = 0):
        c = _Checks()
        c.text("name", name)
        c.non_negative("sets", sets)
        c.non_negative("reps", reps)
        c.day_of_week("day_of_week", day_of_week)
        c.non_negative("order_index", order_index, required=True)
        c.raise_if_any()
        return self.store.workout_plans.add_exercise(
            workout_type_id, name.strip(), sets=sets, reps=reps, duration=duration,
            day_of_week=day_of_week, order_index=order_index,
        )

    def set_workout_done(self, user_id: int, date, exercise_id: int, completed: bool = True):
        day = normalize_date(date)
        log = self.store.workout_logs.set_status(user_id, day, exercise_id, bool(completed))
        self._recalculate(user_id, day)
        return log

    # ------------------------------------------------------------------
    # Mental
    # ------------------------------------------------------------------

    def create_mind_exercise(self, user_id: int, name: str, time: str, duration: Optional[int] = None, order_index: int = 0):
        c = _Checks()
        c.text("name", name)
        c.hhmm("time", time)
        c.non_negative("duration", duration)
        c.raise_if_any()
        return self.store.mind_exercises.create(user_id, name.strip(), time.strip(), duration=duration,
                                                order_index=order_index)

    def set_mind_done(self, user_id: int, date, mind_exercise_id: int, completed: bool = True):
        day = normalize_date(date)
        log = self.store.mind_logs.set_status(user_id, day, mind_exercise_id, bool(completed))
        self._recalculate(user_id, day)
        return log

    # ------------------------------------------------------------------
    # Routines
    # ------------------------------------------------------------------

    def create_routine(self, user_id: int, name: str, type: str, *, description: Optional[str] = None,
                       day_of_week: Optional[int] = None, order_index: int = 0):
        c = _Checks()
        c.text("name", name)
        c.choice("type", type, ROUTINE_TYPES)
        c.day_of_week("day_of_week", day_of_week)
        c.raise_if_any()
        return self.store.routines.create(user_id, name.strip(), type, description=description,
                                          day_of_week=day_of_week, order_index=order_index)

    def set_routine_done(self, user_id: int, date, routine_id: int, completed: bool = True):
        day = normalize_date(date)
        log = self.store.routine_logs.set_status(user_id, day, routine_id, bool(completed))
        self._recalculate(user_id, day)
        return log

    # ------------------------------------------------------------------
    # Objectifs de développement
    # ------------------------------------------------------------------

    def create_dev_goal(self, user_id: int, title: str, type: str, *, description: Optional[str] = None,
                        target_hours: Optional[int] = None, order_index: int = 0):
        c = _Checks()
        c.text("title", title)
        c.choice("type", type, DEV_GOAL_TYPES)
        c.non_negative("target_hours", target_hours)
        c.raise_if_any()
        return self.store.dev_goals.create(user_id, title.strip(), type, description=description,
                                           target_hours=target_hours, order_index=order_index)

    def log_dev_goal(self, user_id: int, date, dev_goal_id: int, completed: bool = True, hours_spent: Optional[int] = None):
        c = _Checks()
        c.non_negative("hours_spent", hours_spent)
        c.raise_if_any()
        day = normalize_date(date)
        extra = {} if hours_spent is None else {"hours_spent": hours_spent}
        log = self.store.dev_goal_logs.set_status(user_id, day, dev_goal_id, bool(completed), **extra)
        self._recalculate(user_id, day)
        return log

    # ------------------------------------------------------------------
    # Hydratation (pas de score de catégorie, mais recalcul comme toute mutation)
    # ------------------------------------------------------------------

    def set_water_intake(self, user_id: int, date, amount: Optional[int] = None, target: Optional[int] = None):
        c = _Checks()
        c.non_negative("amount", amount)
        c.non_negative("target", target)
        c.raise_if_any()
        day = normalize_date(date)
        intake = self.store.water.upsert(user_id, day, amount=amount, target=target)
        self._recalculate(user_id, day)
        return intake

    # ------------------------------------------------------------------
    # Performance
    # ------------------------------------------------------------------

    def daily_performance(self, user_id: int, date):
        """
        Toujours recalculée à la lecture, sans toucher au streak (erreurs propagées,
        contrairement aux mutations).
        """
        return self.recalculator.refresh_day(user_id, date)

    def performance_range(self, user_id: int, start, end) -> list:
        return self.recalculator.performance_range(user_id, start, end)

# app/persistence/repositories/logs_repo.py
# -*- coding: utf-8 -*-
"""
Logs journaliers de complétion (entraînement, mental, routines, dev).

Au plus un log par (user_id, date, <parent>_id) : une mise à jour retrouve et
patche la ligne existante au lieu d'en créer une seconde.
"""
from sqlalchemy import select, and_
from app.errors import NotFoundError
from app.persistence import db
from app.persistence.dates import normalize_date, utcnow
from app.persistence.models import (
    WorkoutLog, MindExerciseLog, RoutineLog, DevGoalLog, Exercise, MindExercise, Routine, DevGoal,
)


class _DailyLogRepository:
    model = None
    parent_model = None
    parent_field = ""
    extra_fields: frozenset = frozenset()

    @property
    def _parent_col(self):
        return getattr(self.model, self.parent_field)

    def _check_fields(self, fields):
        allowed = {"completed", "completed_at", "date"} | self.extra_fields
        unknown = set(fields) - allowed
        if unknown:
            raise TypeError(f"Champs inconnus pour {self.model.__name__}: {sorted(unknown)}")

    @staticmethod
    def _stamp(fields):
        if "completed" in fields and "completed_at" not in fields:
            fields["completed_at"] = utcnow() if fields["completed"] else None

    def get(self, log_id: int):
        with db.get_session() as s:
            r = s.get(self.model, log_id)
            if not r:
                return None
            s.expunge(r)
            return r

    def list_for_day(self, user_id: int, date) -> list:
        day = normalize_date(date)
        m = self.model
        with db.get_session() as s:
            stmt = select(m).where(and_(m.user_id == user_id, m.date == day)).order_by(m.id)
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def set_status(self, user_id: int, date, parent_id: int, completed: bool, **extra):
        """Find-and-patch sur (user, date, parent) ; insertion si absent."""
        self._check_fields(extra)
        day = normalize_date(date)
        m = self.model
        fields = dict(extra, completed=completed)
        self._stamp(fields)
        with db.get_session() as s:
            if s.get(self.parent_model, parent_id) is None:
                raise NotFoundError(f"{self.parent_model.__name__} introuvable: {parent_id}")
            r = s.scalar(select(m).where(and_(m.user_id == user_id, m.date == day,
                                              self._parent_col == parent_id)).limit(1))
            if r is None:
                r = m(user_id=user_id, date=day, **{self.parent_field: parent_id})
            for k, v in fields.items():
                setattr(r, k, v)
            s.add(r); s.flush(); s.refresh(r); s.expunge(r)
            return r

    def update(self, log_id: int, **fields):
        self._check_fields(fields)
        if "date" in fields:
            fields["date"] = normalize_date(fields["date"])
        self._stamp(fields)
        with db.get_session() as s:
            r = s.get(self.model, log_id)
            if not r:
                raise NotFoundError(f"{self.model.__name__} introuvable: {log_id}")
            for k, v in fields.items():
                setattr(r, k, v)
            s.add(r); s.flush(); s.refresh(r); s.expunge(r)
            return r


class WorkoutLogRepository(_DailyLogRepository):
    model = WorkoutLog
    parent_model = Exercise
    parent_field = "exercise_id"


class MindExerciseLogRepository(_DailyLogRepository):
    model = MindExerciseLog
    parent_model = MindExercise
    parent_field = "mind_exercise_id"


class RoutineLogRepository(_DailyLogRepository):
    model = RoutineLog
    parent_model = Routine
    parent_field = "routine_id"


class DevGoalLogRepository(_DailyLogRepository):
    model = DevGoalLog
    parent_model = DevGoal
    parent_field = "dev_goal_id"
    extra_fields = frozenset({"hours_spent"})

# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Fixtures partagées :
- `sql_store` : SqlEntityStore sur une base SQLite temporaire (DB_URL -> tmp file)
- `fake_store` : store en mémoire exposant le même contrat étroit que SqlEntityStore
"""

import datetime as dt
import importlib
from types import SimpleNamespace

import pytest

from app.errors import StoreError


@pytest.fixture
def sql_store(tmp_path, monkeypatch):
    """
    Prépare un environnement propre :
    - crée une base SQLite temporaire
    - définit DB_URL AVANT de recharger le module db (nouvel engine)
    - (re)crée les tables
    Les repositories passent par `db.get_session()` : ils suivent l'engine rechargé.
    """
    db_path = tmp_path / "test_tracker.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path}")

    import app.persistence.db as db
    import app.persistence.models as models
    importlib.reload(db)
    db.init_db(models.Base, drop_and_recreate=True)

    from app.persistence.store import SqlEntityStore
    yield SqlEntityStore()
    db.engine.dispose()


class FakeStore:
    """Store en mémoire ; `fail_on` liste les méthodes qui lèvent StoreError."""

    def __init__(self):
        self.users = {}
        self.tasks, self.workout_logs, self.mind_logs, self.routine_logs, self.dev_goal_logs = [], [], [], [], []
        self.mind_exercises, self.routines, self.dev_goals = [], [], []
        self.performance = {}
        self.fail_on = set()
        self.perf_writes = []
        self.user_writes = []
        self._ids = 0

    # --- helpers de construction ---
    def _id(self):
        self._ids += 1
        return self._ids

    def add_user(self, user_id=1, current=0, best=0, last_streak_date=None):
        self.users[user_id] = SimpleNamespace(id=user_id, current_streak=current, best_streak=best,
                                              last_streak_date=last_streak_date)
        return self.users[user_id]

    def add_task(self, date, completed=False, user_id=1):
        self.tasks.append(SimpleNamespace(id=self._id(), user_id=user_id, date=date, completed=completed))

    def add_workout_log(self, date, completed=False, user_id=1):
        self.workout_logs.append(SimpleNamespace(id=self._id(), user_id=user_id, date=date,
                                                 exercise_id=self._id(), completed=completed))

    def add_mind_exercise(self, user_id=1):
        m = SimpleNamespace(id=self._id(), user_id=user_id)
        self.mind_exercises.append(m)
        return m

    def add_mind_log(self, date, mind_exercise_id, completed=False, user_id=1):
        self.mind_logs.append(SimpleNamespace(id=self._id(), user_id=user_id, date=date,
                                              mind_exercise_id=mind_exercise_id, completed=completed))

    def add_routine(self, type, day_of_week=None, user_id=1):
        r = SimpleNamespace(id=self._id(), user_id=user_id, type=type, day_of_week=day_of_week)
        self.routines.append(r)
        return r

    def add_routine_log(self, date, routine_id, completed=False, user_id=1):
        self.routine_logs.append(SimpleNamespace(id=self._id(), user_id=user_id, date=date,
                                                 routine_id=routine_id, completed=completed))

    def add_dev_goal(self, type, user_id=1):
        g = SimpleNamespace(id=self._id(), user_id=user_id, type=type)
        self.dev_goals.append(g)
        return g

    def add_dev_goal_log(self, date, dev_goal_id, completed=False, user_id=1):
        self.dev_goal_logs.append(SimpleNamespace(id=self._id(), user_id=user_id, date=date,
                                                  dev_goal_id=dev_goal_id, completed=completed, hours_spent=0))

    # --- contrat ---
    def _check(self, name):
        if name in self.fail_on:
            raise StoreError(f"{name} indisponible")

    def _day(self, name, rows, user_id, date):
        self._check(name)
        return [r for r in rows if r.user_id == user_id and r.date == date]

    def get_tasks(self, user_id, date):
        return self._day("get_tasks", self.tasks, user_id, date)

    def get_workout_logs(self, user_id, date):
        return self._day("get_workout_logs", self.workout_logs, user_id, date)

    def get_mind_exercise_logs(self, user_id, date):
        return self._day("get_mind_exercise_logs", self.mind_logs, user_id, date)

    def get_routine_logs(self, user_id, date):
        return self._day("get_routine_logs", self.routine_logs, user_id, date)

    def get_dev_goal_logs(self, user_id, date):
        return self._day("get_dev_goal_logs", self.dev_goal_logs, user_id, date)

    def get_mind_exercises(self, user_id):
        self._check("get_mind_exercises")
        return [m for m in self.mind_exercises if m.user_id == user_id]

    def get_routines(self, user_id):
        self._check("get_routines")
        return [r for r in self.routines if r.user_id == user_id]

    def get_dev_goals(self, user_id):
        self._check("get_dev_goals")
        return [g for g in self.dev_goals if g.user_id == user_id]

    def get_user(self, user_id):
        self._check("get_user")
        return self.users.get(user_id)

    def get_daily_performance(self, user_id, date):
        return self.performance.get((user_id, date))

    def get_daily_performance_range(self, user_id, start_date, end_date):
        return sorted((p for (uid, d), p in self.performance.items() if uid == user_id and start_date <= d <= end_date),
                      key=lambda p: p.date)

    def upsert_daily_performance(self, user_id, date, **scores):
        self._check("upsert_daily_performance")
        self.perf_writes.append((user_id, date, dict(scores)))
        self.performance[(user_id, date)] = SimpleNamespace(user_id=user_id, date=date, **scores)
        return self.performance[(user_id, date)]

    def upsert_user(self, user_id, **fields):
        self._check("upsert_user")
        self.user_writes.append((user_id, dict(fields)))
        u = self.users[user_id]
        for k, v in fields.items():
            setattr(u, k, v)
        return u


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def today():
    # Un mardi (0 = dimanche => 2)
    return dt.date(2025, 3, 4)

# tests/test_repo_sqlite.py
# -*- coding: utf-8 -*-
"""
Tests d'intégration pour la couche persistence (SQLite/SQLAlchemy).

Ce fichier couvre :
- création utilisateur, unicité email (StoreError chaînée sur IntegrityError), upsert des streaks,
- tâches : ajout, portée d'un seul jour, complétion horodatée, suppression, NotFound,
- logs : find-and-patch sur (user, date, parent), pas de doublon,
- hydratation : une ligne par jour, champs conservés,
- performance : upsert par (user, date), requêtes par plage ordonnées,
- normalisation des dates (date, datetime, string ISO),
- contrat SqlEntityStore utilisé par l'agrégateur.
"""

import datetime as dt

import pytest
from sqlalchemy.exc import IntegrityError

from app.errors import NotFoundError, StoreError, ValidationError
from app.services import performance_service


def add_days(date: dt.date, n: int) -> dt.date:
    return date + dt.timedelta(days=n)


# ---------------------------------------------------------------------
# UTILISATEURS
# ---------------------------------------------------------------------

def test_create_and_get_user(sql_store):
    u = sql_store.users.create("User@Example.com")
    assert u.id > 0
    assert (u.current_streak, u.best_streak) == (0, 0)
    got = sql_store.users.get_by_email("user@example.com")
    assert got.id == u.id
    assert sql_store.get_user(u.id).email == "user@example.com"
    assert sql_store.get_user(9999) is None


def test_get_or_create_user(sql_store):
    u1 = sql_store.users.get_or_create("a@b.com")
    u2 = sql_store.users.get_or_create("A@B.com")
    assert u1.id == u2.id


def test_unique_email_enforced(sql_store):
    sql_store.users.create("dup@example.com")
    with pytest.raises(StoreError) as exc:
        sql_store.users.create("dup@example.com")
    assert isinstance(exc.value.__cause__, IntegrityError)


def test_upsert_user_streak_fields(sql_store):
    u = sql_store.users.create("s@x.com")
    day = dt.date(2025, 1, 1)
    updated = sql_store.upsert_user(u.id, current_streak=3, best_streak=5, last_streak_date=day)
    assert (updated.current_streak, updated.best_streak, updated.last_streak_date) == (3, 5, day)
    assert sql_store.get_user(u.id).best_streak == 5


def test_upsert_unknown_user_without_email_is_not_found(sql_store):
    with pytest.raises(NotFoundError):
        sql_store.upsert_user(123, current_streak=1, best_streak=1)


# ---------------------------------------------------------------------
# TÂCHES
# ---------------------------------------------------------------------

def test_tasks_are_scoped_to_one_day(sql_store):
    u = sql_store.users.create("t@x.com")
    d = dt.date(2025, 2, 2)
    sql_store.tasks.add(u.id, d, "A", due_time="09:00")
    sql_store.tasks.add(u.id, add_days(d, -1), "Hier")
    sql_store.tasks.add(u.id, d, "B")

    titles = [t.title for t in sql_store.get_tasks(u.id, d)]
    assert titles == ["A", "B"]  # heure d'abord, sans heure ensuite


def test_task_completion_sets_and_clears_timestamp(sql_store):
    u = sql_store.users.create("c@x.com")
    t = sql_store.tasks.add(u.id, "2025-02-03", "Lire")
    assert t.completed is False and t.completed_at is None

    t = sql_store.tasks.update(t.id, completed=True)
    assert t.completed is True and t.completed_at is not None

    t = sql_store.tasks.update(t.id, completed=False)
    assert t.completed_at is None


def test_task_update_and_delete_unknown(sql_store):
    with pytest.raises(NotFoundError):
        sql_store.tasks.update(404, completed=True)
    assert sql_store.tasks.delete(404) is False


def test_delete_task(sql_store):
    u = sql_store.users.create("d@x.com")
    t = sql_store.tasks.add(u.id, dt.date(2025, 2, 4), "X")
    assert sql_store.tasks.delete(t.id) is True
    assert sql_store.tasks.get(t.id) is None


# ---------------------------------------------------------------------
# DÉFINITIONS ET LOGS
# ---------------------------------------------------------------------

def test_exercises_for_day_include_every_day_ones(sql_store):
    u = sql_store.users.create("w@x.com")
    plan = sql_store.workout_plans.create_plan(u.id, "Plan", max_time=30)
    sql_store.workout_plans.add_exercise(plan.id, "Lundi", day_of_week=1, order_index=1)
    sql_store.workout_plans.add_exercise(plan.id, "Mardi", day_of_week=2)
    sql_store.workout_plans.add_exercise(plan.id, "Quotidien", day_of_week=None, order_index=0)

    assert [e.name for e in sql_store.workout_plans.list_exercises(plan.id, day_of_week=1)] == ["Quotidien", "Lundi"]
    assert len(sql_store.workout_plans.list_exercises(plan.id)) == 3
    assert [p.name for p in sql_store.workout_plans.list_plans(u.id)] == ["Plan"]


def test_add_exercise_to_unknown_plan(sql_store):
    with pytest.raises(NotFoundError):
        sql_store.workout_plans.add_exercise(999, "X")


def test_log_set_status_finds_and_patches(sql_store):
    u = sql_store.users.create("l@x.com")
    m = sql_store.mind_exercises.create(u.id, "Respiration", "05:40", duration=15)
    d = dt.date(2025, 3, 3)

    first = sql_store.mind_logs.set_status(u.id, d, m.id, True)
    second = sql_store.mind_logs.set_status(u.id, d.isoformat(), m.id, False)

    assert first.id == second.id
    assert second.completed is False and second.completed_at is None
    assert len(sql_store.get_mind_exercise_logs(u.id, d)) == 1


def test_log_update_by_id(sql_store):
    u = sql_store.users.create("r@x.com")
    r = sql_store.routines.create(u.id, "Sérum", "night")
    log = sql_store.routine_logs.set_status(u.id, dt.date(2025, 3, 4), r.id, False)

    patched = sql_store.routine_logs.update(log.id, completed=True)
    assert patched.completed is True and patched.completed_at is not None
    with pytest.raises(NotFoundError):
        sql_store.routine_logs.update(log.id + 100, completed=True)


def test_log_for_unknown_parent_is_rejected(sql_store):
    u = sql_store.users.create("orphan@x.com")
    d = dt.date(2025, 3, 4)
    with pytest.raises(NotFoundError):
        sql_store.mind_logs.set_status(u.id, d, 9999, True)
    with pytest.raises(NotFoundError):
        sql_store.workout_logs.set_status(u.id, d, 4242, True)
    assert sql_store.get_mind_exercise_logs(u.id, d) == []
    assert sql_store.get_workout_logs(u.id, d) == []


def test_foreign_keys_are_enforced(sql_store):
    with pytest.raises(StoreError) as exc:
        sql_store.tasks.add(424242, dt.date(2025, 3, 4), "Sans utilisateur")
    assert isinstance(exc.value.__cause__, IntegrityError)


def test_dev_goal_log_hours(sql_store):
    u = sql_store.users.create("g@x.com")
    g = sql_store.dev_goals.create(u.id, "DSA", "daily", target_hours=1)
    d = dt.date(2025, 3, 5)
    sql_store.dev_goal_logs.set_status(u.id, d, g.id, True, hours_spent=2)
    log = sql_store.dev_goal_logs.set_status(u.id, d, g.id, True)
    assert log.hours_spent == 2  # non fourni => conservé
    with pytest.raises(TypeError):
        sql_store.workout_logs.set_status(u.id, d, 1, True, hours_spent=1)


# ---------------------------------------------------------------------
# HYDRATATION ET PERFORMANCE
# ---------------------------------------------------------------------

def test_water_upsert_one_row_per_day(sql_store):
    u = sql_store.users.create("h@x.com")
    d = dt.date(2025, 4, 4)
    w1 = sql_store.water.upsert(u.id, d, amount=500)
    assert w1.target == 3000
    w2 = sql_store.water.upsert(u.id, d, target=2500)
    assert (w2.id, w2.amount, w2.target) == (w1.id, 500, 2500)


def test_upsert_performance_insert_then_update(sql_store):
    u = sql_store.users.create("p@x.com")
    d = dt.date(2025, 3, 3)
    r1 = sql_store.upsert_daily_performance(u.id, d, tasks_score=50, overall_score=10)
    r2 = sql_store.upsert_daily_performance(u.id, d, tasks_score=100, overall_score=20)
    assert r1.id == r2.id
    got = sql_store.get_daily_performance(u.id, dt.datetime(2025, 3, 3, 10, 0))
    assert (got.tasks_score, got.overall_score, got.mind_score) == (100, 20, 0)


def test_performance_range_order(sql_store):
    u = sql_store.users.create("range@x.com")
    start = dt.date(2025, 1, 1)
    for i in (3, 0, 4, 1, 2):
        sql_store.upsert_daily_performance(u.id, add_days(start, i), overall_score=i * 10)

    rows = sql_store.get_daily_performance_range(u.id, add_days(start, 1), add_days(start, 3))
    assert [r.overall_score for r in rows] == [10, 20, 30]


def test_invalid_date_string(sql_store):
    with pytest.raises(ValidationError):
        sql_store.get_tasks(1, "03/03/2025")


# ---------------------------------------------------------------------
# CONTRAT COMPLET via l'agrégateur
# ---------------------------------------------------------------------

def test_aggregate_on_sql_store(sql_store):
    u = sql_store.users.create("agg@x.com")
    d = dt.date(2025, 3, 4)  # mardi
    for title, done in (("a", True), ("b", True), ("c", True), ("d", False)):
        t = sql_store.tasks.add(u.id, d, title)
        if done:
            sql_store.tasks.update(t.id, completed=True)
    m1 = sql_store.mind_exercises.create(u.id, "M1", "06:00")
    sql_store.mind_exercises.create(u.id, "M2", "07:00")
    sql_store.mind_logs.set_status(u.id, d, m1.id, True)
    weekly = sql_store.routines.create(u.id, "Gommage", "weekly", day_of_week=2)
    sql_store.routine_logs.set_status(u.id, d, weekly.id, True)
    weekly_goal = sql_store.dev_goals.create(u.id, "LeetCode x5", "weekly")
    sql_store.dev_goals.create(u.id, "DSA", "daily")
    sql_store.dev_goal_logs.set_status(u.id, d, weekly_goal.id, True)

    perf = performance_service.aggregate(sql_store, u.id, d, dow=2)
    again = performance_service.aggregate(sql_store, u.id, d, dow=2)

    assert (perf.tasks_score, perf.workout_score, perf.mind_score, perf.routine_score, perf.dev_score) == (75, 0, 50, 100, 0)
    assert perf.overall_score == 45
    assert again.id == perf.id
    assert again.overall_score == perf.overall_score

# app/services/performance_service.py
# -*- coding: utf-8 -*-
"""
Agrégateur de performance journalière.

DailyPerformance est un cache : toujours recalculable depuis les logs.
- aggregate() : lit tout, calcule, puis fait UN upsert. Si une lecture échoue,
  rien n'est écrit et l'erreur remonte.
- get_performance_range() : cache-aside sur une plage de dates (jamais de streak).
"""
from __future__ import annotations

import datetime as dt
import logging

from app.errors import ValidationError
from app.persistence.dates import normalize_date, daterange
from app.services.score_engine import DayScores, compute_day_scores

logger = logging.getLogger(__name__)


def load_day_scores(store, user_id: int, date, *, dow: int) -> DayScores:
    """Lit les logs/définitions du jour via le store et calcule les scores (sans écrire)."""
    day = normalize_date(date)
    return compute_day_scores(
        tasks=store.get_tasks(user_id, day),
        workout_logs=store.get_workout_logs(user_id, day),
        mind_logs=store.get_mind_exercise_logs(user_id, day),
        mind_exercises=store.get_mind_exercises(user_id),
        routine_logs=store.get_routine_logs(user_id, day),
        routines=store.get_routines(user_id),
        dev_goal_logs=store.get_dev_goal_logs(user_id, day),
        dev_goals=store.get_dev_goals(user_id),
        dow=dow,
    )


def aggregate(store, user_id: int, date, *, dow: int):
    """
    Recalcule et persiste la DailyPerformance de (user_id, date).

    Args:
        dow: jour de la semaine courant (0 = dimanche) pour les routines hebdo

    Returns:
        la ligne DailyPerformance upsertée
    """
    day = normalize_date(date)
    scores = load_day_scores(store, user_id, day, dow=dow)
    perf = store.upsert_daily_performance(user_id, day, **scores.as_fields())
    logger.debug("Performance user=%s %s: %s", user_id, day.isoformat(), scores)
    return perf


def get_performance_range(store, user_id: int, start, end, *, today: dt.date, dow: int) -> list:
    """
    Plage [start .. end] incluse, ordonnée par date.

    - aujourd'hui est toujours recalculé (données susceptibles d'avoir bougé) ;
    - tout autre jour sans ligne en cache est calculé à la demande.
    """
    start_d, end_d = normalize_date(start), normalize_date(end)
    if start_d > end_d:
        raise ValidationError(f"plage invalide: {start_d} > {end_d}")

    for day in daterange(start_d, end_d):
        if day == today or store.get_daily_performance(user_id, day) is None:
            aggregate(store, user_id, day, dow=dow)

    return store.get_daily_performance_range(user_id, start_d, end_d)

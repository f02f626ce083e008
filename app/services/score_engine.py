# app/services/score_engine.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Sequence

# Échelle des scores (entiers)
MIN_SCORE = 0
MAX_SCORE = 100

CATEGORIES = ("tasks", "workout", "mind", "routine", "dev")
ROUTINE_TYPES = ("morning", "night", "weekly")
DEV_GOAL_TYPES = ("daily", "weekly", "monthly", "yearly")


@dataclass(frozen=True)
class DayScores:
    """Scores d'une journée utilisateur (0..100 chacun)."""
    tasks_score: int
    workout_score: int
    mind_score: int
    routine_score: int
    dev_score: int
    overall_score: int
    has_any_activity: bool

    def as_fields(self) -> Dict[str, int]:
        """Champs persistés dans DailyPerformance (sans le drapeau d'activité)."""
        d = asdict(self)
        d.pop("has_any_activity")
        return d


def percent(done: int, total: int) -> int:
    """
    round(100 * done / total), arrondi au plus proche, égalités vers le haut
    (valeurs positives => « away from zero »). Calcul entier : pas d'erreur flottante.

    total <= 0 => 0 (branche explicite, jamais de ZeroDivisionError).
    """
    if total <= 0:
        return MIN_SCORE
    done = max(0, min(done, total))
    return (200 * done + total) // (2 * total)


def day_of_week(d: dt.date) -> int:
    """0 = dimanche .. 6 = samedi (date.weekday() compte 0 = lundi)."""
    return (d.weekday() + 1) % 7


def score_tasks(tasks: Sequence) -> int:
    """Tâches créées pour ce jour uniquement."""
    return percent(sum(1 for t in tasks if t.completed), len(tasks))


def score_workout(workout_logs: Sequence) -> int:
    # Dénominateur = logs du jour, pas les exercices planifiés
    return percent(sum(1 for w in workout_logs if w.completed), len(workout_logs))


def score_mind(mind_logs: Sequence, mind_exercises: Sequence) -> int:
    """Dénominateur = toutes les définitions d'exercices mentaux de l'utilisateur."""
    return percent(sum(1 for m in mind_logs if m.completed), len(mind_exercises))


def relevant_routines(routines: Iterable, dow: int) -> list:
    """Routines du jour : morning + night + weekly dont day_of_week == dow."""
    return [
        r for r in routines
        if r.type in ("morning", "night") or (r.type == "weekly" and r.day_of_week == dow)
    ]


def score_routines(routine_logs: Sequence, routines: Sequence, dow: int) -> int:
    todays_ids = {r.id for r in relevant_routines(routines, dow)}
    done_ids = {log.routine_id for log in routine_logs if log.completed and log.routine_id in todays_ids}
    return percent(len(done_ids), len(todays_ids))


def score_dev(dev_goal_logs: Sequence, dev_goals: Sequence) -> int:
    """Seuls les objectifs `daily` comptent ; weekly/monthly/yearly sont exclus."""
    daily_ids = {g.id for g in dev_goals if g.type == "daily"}
    done_ids = {log.dev_goal_id for log in dev_goal_logs if log.completed and log.dev_goal_id in daily_ids}
    return percent(len(done_ids), len(daily_ids))


def overall_score(scores: Sequence[int], has_any_activity: bool) -> int:
    """
    Moyenne non pondérée des cinq scores, y compris les catégories vides (0) :
    une catégorie non remplie tire la moyenne vers le bas.
    Sans aucune ligne de log pour la journée => 0.
    """
    if not has_any_activity or not scores:
        return MIN_SCORE
    n = len(scores)
    return (2 * sum(scores) + n) // (2 * n)


def compute_day_scores(
    *,
    tasks: Sequence,
    workout_logs: Sequence,
    mind_logs: Sequence,
    mind_exercises: Sequence,
    routine_logs: Sequence,
    routines: Sequence,
    dev_goal_logs: Sequence,
    dev_goals: Sequence,
    dow: int,
) -> DayScores:
    """
    Calcule les cinq scores de catégorie puis le score global d'une journée.

    Fonction pure : les logs et définitions sont déjà chargés par l'appelant.

    Args:
        tasks, workout_logs, mind_logs, routine_logs, dev_goal_logs: lignes du jour
        mind_exercises, routines, dev_goals: définitions (toutes dates)
        dow: jour de la semaine (0 = dimanche) utilisé pour filtrer les routines hebdo

    Returns:
        DayScores
    """
    tasks_s = score_tasks(tasks)
    workout_s = score_workout(workout_logs)
    mind_s = score_mind(mind_logs, mind_exercises)
    routine_s = score_routines(routine_logs, routines, dow)
    dev_s = score_dev(dev_goal_logs, dev_goals)

    # Présence de lignes (pas leur complétion)
    has_any_activity = any(len(rows) > 0 for rows in (tasks, workout_logs, mind_logs, routine_logs, dev_goal_logs))

    return DayScores(
        tasks_score=tasks_s,
        workout_score=workout_s,
        mind_score=mind_s,
        routine_score=routine_s,
        dev_score=dev_s,
        overall_score=overall_score([tasks_s, workout_s, mind_s, routine_s, dev_s], has_any_activity),
        has_any_activity=has_any_activity,
    )


def interpret_overall(score: int, threshold: int = 70) -> str:
    """Message court pour le tableau de bord."""
    s = max(MIN_SCORE, min(MAX_SCORE, score))
    if s >= 90:
        return "Journée exceptionnelle. Toutes les catégories sont au vert."
    if s >= threshold:
        return "Bonne journée : le streak continue."
    if s >= 40:
        return "Journée moyenne. Complète les catégories vides pour remonter la moyenne."
    if s > 0:
        return "Journée difficile. Une routine ou une tâche de plus fait déjà la différence."
    return "Aucune activité enregistrée pour ce jour."

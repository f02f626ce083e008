# app/services/streak_engine.py
# -*- coding: utf-8 -*-
"""
Moteur de streak : met à jour current_streak / best_streak d'un utilisateur
à partir du score global du jour.

Règles (uniquement si date == aujourd'hui selon l'horloge injectée) :
    score >= seuil                    -> current += 1 ; best = max(best, current)
    score <  seuil et current > 0     -> current = 0 (best conservé)
    score <  seuil et current == 0    -> aucune écriture

Recalculer un jour passé ne modifie jamais les compteurs.

Par défaut, chaque appel qualifiant du jour incrémente à nouveau le streak
(comportement historique). `StreakPolicy(once_per_day=True)` limite à un
incrément par jour via `last_streak_date`.
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from app.config import DEFAULT_STREAK_THRESHOLD, Settings
from app.persistence.dates import normalize_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakPolicy:
    threshold: int = DEFAULT_STREAK_THRESHOLD
    once_per_day: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "StreakPolicy":
        return cls(threshold=settings.streak_threshold, once_per_day=settings.streak_once_per_day)


def next_streak(current: int, best: int, overall_score: int, threshold: int = DEFAULT_STREAK_THRESHOLD) -> Optional[Tuple[int, int]]:
    """
    Transition pure. Retourne (current, best) après la journée, ou None si
    aucune écriture n'est nécessaire.
    """
    current = current or 0
    best = best or 0
    if overall_score >= threshold:
        current += 1
        return current, max(best, current)
    if current > 0:
        return 0, max(best, current)
    return None


def update_streak(store, user_id: int, date, overall_score: int, *, today: dt.date,
                  policy: StreakPolicy = StreakPolicy()):
    """
    Applique la transition de streak pour `user_id`.

    Returns:
        l'utilisateur (modifié ou non), ou None s'il n'existe pas.
    """
    day = normalize_date(date)
    user = store.get_user(user_id)
    if user is None:
        return None
    if day != today:
        # Jour passé/futur : jamais de mutation rétroactive
        return user

    qualifies = overall_score >= policy.threshold
    if policy.once_per_day and qualifies and user.last_streak_date == today:
        return user

    transition = next_streak(user.current_streak, user.best_streak, overall_score, policy.threshold)
    if transition is None:
        return user

    current, best = transition
    last_date = today if qualifies else None
    logger.info("Streak user=%s %s: %s -> %s (best %s, score %s)",
                user_id, day.isoformat(), user.current_streak, current, best, overall_score)
    return store.upsert_user(user_id, current_streak=current, best_streak=best, last_streak_date=last_date)

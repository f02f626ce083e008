# app/services/orchestrator.py
# -*- coding: utf-8 -*-
"""
Point d'entrée « recalculer la journée », appelé après chaque mutation :
    aggregate(user, date) -> (si l'utilisateur existe) update_streak(score global)

Les lectures (`refresh_day`, `performance_range`) passent uniquement par
l'agrégateur : afficher une journée ne modifie jamais le streak.

L'horloge est injectée (callable -> date) pour simuler les changements de jour
dans les tests. Un verrou par (user_id, date) sérialise agrégation + streak ;
il est retiré du registre dès qu'aucun appel ne l'utilise plus.
"""
from __future__ import annotations

import datetime as dt
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, List, Tuple

from app.persistence.dates import normalize_date
from app.services import performance_service
from app.services.score_engine import day_of_week
from app.services.streak_engine import StreakPolicy, update_streak

logger = logging.getLogger(__name__)

Clock = Callable[[], dt.date]


def system_clock() -> dt.date:
    """Date locale du serveur."""
    return dt.date.today()


class DayRecalculator:
    def __init__(self, store, clock: Clock = system_clock, policy: StreakPolicy = StreakPolicy()) -> None:
        self.store = store
        self.clock = clock
        self.policy = policy
        # clé -> [verrou, nombre d'appels en cours]
        self._locks: Dict[Tuple[int, dt.date], List] = {}
        self._locks_guard = threading.Lock()

    def scoring_day_of_week(self) -> int:
        """Jour de la semaine (0 = dimanche) utilisé pour filtrer les routines hebdo."""
        return day_of_week(self.clock())

    @contextmanager
    def _locked(self, user_id: int, day: dt.date):
        key = (user_id, day)
        with self._locks_guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def recalculate_day(self, user_id: int, date):
        """
        Recalcule la DailyPerformance de (user_id, date) puis le streak.
        Le streak est ignoré (sans erreur) si l'utilisateur n'existe pas encore.
        Réservé aux mutations.

        Returns:
            la DailyPerformance upsertée
        """
        day = normalize_date(date)
        today = self.clock()
        with self._locked(user_id, day):
            perf = performance_service.aggregate(self.store, user_id, day, dow=day_of_week(today))
            user = update_streak(self.store, user_id, day, perf.overall_score, today=today, policy=self.policy)
            if user is None:
                logger.debug("Streak ignoré : utilisateur %s absent", user_id)
        return perf

    def refresh_day(self, user_id: int, date):
        """Recalcule le cache d'une journée pour l'afficher (sans streak)."""
        day = normalize_date(date)
        with self._locked(user_id, day):
            return performance_service.aggregate(self.store, user_id, day, dow=self.scoring_day_of_week())

    def performance_range(self, user_id: int, start, end) -> list:
        """Lecture d'une plage avec calcul paresseux des jours manquants (sans streak)."""
        today = self.clock()
        return performance_service.get_performance_range(
            self.store, user_id, start, end, today=today, dow=day_of_week(today),
        )

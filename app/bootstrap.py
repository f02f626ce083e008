# app/bootstrap.py
# -*- coding: utf-8 -*-
from app.config import Settings, load_settings
from app.core.logging import setup_logging
from app.persistence.db import init_db
from app.persistence.models import Base
from app.persistence.store import SqlEntityStore
from app.services.orchestrator import DayRecalculator
from app.services.streak_engine import StreakPolicy
from app.services.tracker_service import TrackerService


def build_tracker(settings: Settings | None = None, drop_and_recreate: bool = False) -> TrackerService:
    """Logging + schéma + store SQL + orchestrateur, prêts à l'emploi."""
    settings = settings or load_settings()
    setup_logging(settings)
    init_db(Base, drop_and_recreate=drop_and_recreate)
    store = SqlEntityStore()
    recalculator = DayRecalculator(store, policy=StreakPolicy.from_settings(settings))
    return TrackerService(store, recalculator)

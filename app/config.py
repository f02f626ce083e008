# app/config.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import os
from dataclasses import dataclass

from app.errors import ValidationError

DEFAULT_DB_URL = "sqlite:///daily_tracker.db"
DEFAULT_EMAIL = "user@example.com"
DEFAULT_STREAK_THRESHOLD = 70
DEFAULT_WATER_TARGET_ML = 3000

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Réglages lus depuis l'environnement."""
    default_email: str
    streak_threshold: int
    streak_once_per_day: bool
    water_target_ml: int
    log_level: str
    log_file: str | None


def _int_env(name: str, default: int, errors: list) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        errors.append(f"{name} doit être un entier (reçu {raw!r})")
        return default


def load_settings() -> Settings:
    """
    Construit les Settings à partir des variables d'environnement.
    Lève ValidationError si une valeur est invalide (toutes les erreurs sont listées).
    """
    errors: list[str] = []

    threshold = _int_env("STREAK_THRESHOLD", DEFAULT_STREAK_THRESHOLD, errors)
    if not (0 <= threshold <= 100):
        errors.append(f"STREAK_THRESHOLD hors bornes: {threshold} (attendu 0..100)")

    water_target = _int_env("WATER_TARGET_ML", DEFAULT_WATER_TARGET_ML, errors)
    if water_target < 0:
        errors.append(f"WATER_TARGET_ML négatif: {water_target}")

    if errors:
        raise ValidationError("; ".join(errors))

    return Settings(
        default_email=os.getenv("TRACKER_DEFAULT_EMAIL", DEFAULT_EMAIL).strip().lower(),
        streak_threshold=threshold,
        streak_once_per_day=os.getenv("STREAK_ONCE_PER_DAY", "false").strip().lower() in _TRUTHY,
        water_target_ml=water_target,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_file=os.getenv("LOG_FILE", "").strip() or None,
    )

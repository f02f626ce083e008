# tests/test_config.py
# -*- coding: utf-8 -*-
"""Lecture des réglages depuis l'environnement."""

import pytest

from app.config import DEFAULT_EMAIL, load_settings
from app.errors import ValidationError

_VARS = ("TRACKER_DEFAULT_EMAIL", "STREAK_THRESHOLD", "STREAK_ONCE_PER_DAY",
         "WATER_TARGET_ML", "LOG_LEVEL", "LOG_FILE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = load_settings()
    assert s.default_email == DEFAULT_EMAIL
    assert (s.streak_threshold, s.streak_once_per_day, s.water_target_ml) == (70, False, 3000)
    assert (s.log_level, s.log_file) == ("INFO", None)


def test_overrides(monkeypatch):
    monkeypatch.setenv("TRACKER_DEFAULT_EMAIL", " Me@Example.COM ")
    monkeypatch.setenv("STREAK_THRESHOLD", "80")
    monkeypatch.setenv("STREAK_ONCE_PER_DAY", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = load_settings()
    assert s.default_email == "me@example.com"
    assert s.streak_threshold == 80
    assert s.streak_once_per_day is True
    assert s.log_level == "DEBUG"


def test_invalid_values_are_all_reported(monkeypatch):
    monkeypatch.setenv("STREAK_THRESHOLD", "150")
    monkeypatch.setenv("WATER_TARGET_ML", "beaucoup")
    with pytest.raises(ValidationError) as exc:
        load_settings()
    assert "STREAK_THRESHOLD" in str(exc.value)
    assert "WATER_TARGET_ML" in str(exc.value)

# app/persistence/dates.py
# -*- coding: utf-8 -*-
import datetime as dt

from app.errors import ValidationError


def normalize_date(d) -> dt.date:
    """Ramène date / datetime / 'YYYY-MM-DD' à un jour calendaire."""
    if isinstance(d, dt.datetime):
        return d.date()
    if isinstance(d, dt.date):
        return d
    if isinstance(d, str):
        try:
            return dt.date.fromisoformat(d.strip())
        except ValueError as e:
            raise ValidationError(f"date invalide: {d!r} (attendu YYYY-MM-DD)") from e
    raise ValidationError(f"type de date invalide: {type(d).__name__}")


def daterange(start: dt.date, end: dt.date):
    """Génère les jours de [start .. end] inclus, en ordre croissant."""
    for i in range((end - start).days + 1):
        yield start + dt.timedelta(days=i)


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)

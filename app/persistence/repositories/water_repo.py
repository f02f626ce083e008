# app/persistence/repositories/water_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, and_
from app.config import DEFAULT_WATER_TARGET_ML
from app.persistence import db
from app.persistence.dates import normalize_date
from app.persistence.models import WaterIntake

class WaterIntakeRepository:
    def get(self, user_id: int, date) -> WaterIntake | None:
        day = normalize_date(date)
        with db.get_session() as s:
            w = s.scalar(select(WaterIntake).where(and_(WaterIntake.user_id == user_id, WaterIntake.date == day)).limit(1))
            if not w:
                return None
            s.expunge(w)
            return w

    def upsert(self, user_id: int, date, amount: int | None = None, target: int | None = None) -> WaterIntake:
        """Une seule ligne par (user, date) ; les champs non fournis sont conservés."""
        day = normalize_date(date)
        with db.get_session() as s:
            w = s.scalar(select(WaterIntake).where(and_(WaterIntake.user_id == user_id, WaterIntake.date == day)).limit(1))
            if w is None:
                w = WaterIntake(user_id=user_id, date=day, amount=0, target=DEFAULT_WATER_TARGET_ML)
            if amount is not None:
                w.amount = amount
            if target is not None:
                w.target = target
            s.add(w); s.flush(); s.refresh(w); s.expunge(w)
            return w

# app/persistence/repositories/performance_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, and_
from app.persistence import db
from app.persistence.dates import normalize_date
from app.persistence.models import DailyPerformance

SCORE_FIELDS = ("tasks_score", "workout_score", "mind_score", "routine_score", "dev_score", "overall_score")

class DailyPerformanceRepository:
    def get(self, user_id: int, date) -> DailyPerformance | None:
        day = normalize_date(date)
        with db.get_session() as s:
            rec = s.scalar(select(DailyPerformance).where(
                and_(DailyPerformance.user_id == user_id, DailyPerformance.date == day)).limit(1))
            if not rec:
                return None
            s.expunge(rec)
            return rec

    def upsert(self, user_id: int, date, **scores) -> DailyPerformance:
        unknown = set(scores) - set(SCORE_FIELDS)
        if unknown:
            raise TypeError(f"Scores inconnus: {sorted(unknown)}")
        day = normalize_date(date)
        with db.get_session() as s:
            rec = s.scalar(select(DailyPerformance).where(
                and_(DailyPerformance.user_id == user_id, DailyPerformance.date == day)).limit(1))
            if rec is None:
                rec = DailyPerformance(user_id=user_id, date=day)
            for k, v in scores.items():
                setattr(rec, k, v)
            s.add(rec); s.flush(); s.refresh(rec); s.expunge(rec)
            return rec

    def get_range(self, user_id: int, start=None, end=None, asc=True) -> list[DailyPerformance]:
        with db.get_session() as s:
            stmt = select(DailyPerformance).where(DailyPerformance.user_id == user_id)
            if start is not None:
                stmt = stmt.where(DailyPerformance.date >= normalize_date(start))
            if end is not None:
                stmt = stmt.where(DailyPerformance.date <= normalize_date(end))
            stmt = stmt.order_by(DailyPerformance.date.asc() if asc else DailyPerformance.date.desc())
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows


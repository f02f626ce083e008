# app/persistence/repositories/tasks_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, and_
from app.errors import NotFoundError
from app.persistence import db
from app.persistence.dates import normalize_date, utcnow
from app.persistence.models import Task

_TASK_FIELDS = {"title", "completed", "completed_at", "due_time", "date"}

class TaskRepository:
    def add(self, user_id: int, date, title: str, due_time: str | None = None) -> Task:
        day = normalize_date(date)
        with db.get_session() as s:
            t = Task(user_id=user_id, date=day, title=title, due_time=due_time, completed=False)
            s.add(t); s.flush(); s.refresh(t); s.expunge(t)
            return t

    def get(self, task_id: int) -> Task | None:
        with db.get_session() as s:
            t = s.get(Task, task_id)
            if not t:
                return None
            s.expunge(t)
            return t

    def list_for_day(self, user_id: int, date) -> list[Task]:
        """Uniquement les tâches créées pour ce jour précis (pas de report)."""
        day = normalize_date(date)
        with db.get_session() as s:
            stmt = (select(Task)
                    .where(and_(Task.user_id == user_id, Task.date == day))
                    .order_by(Task.due_time.is_(None), Task.due_time, Task.id))
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def update(self, task_id: int, **fields) -> Task:
        unknown = set(fields) - _TASK_FIELDS
        if unknown:
            raise TypeError(f"Champs de tâche inconnus: {sorted(unknown)}")
        with db.get_session() as s:
            t = s.get(Task, task_id)
            if not t:
                raise NotFoundError(f"Tâche introuvable: {task_id}")
            if "date" in fields:
                fields["date"] = normalize_date(fields["date"])
            if "completed" in fields and "completed_at" not in fields:
                fields["completed_at"] = utcnow() if fields["completed"] else None
            for k, v in fields.items():
                setattr(t, k, v)
            s.add(t); s.flush(); s.refresh(t); s.expunge(t)
            return t

    def delete(self, task_id: int) -> bool:
        with db.get_session() as s:
            t = s.get(Task, task_id)
            if not t:
                return False
            s.delete(t)
            return True

# app/persistence/repositories/users_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select
from app.errors import NotFoundError
from app.persistence import db
from app.persistence.models import User

# Champs modifiables via upsert (profil + compteurs de streak)
_USER_FIELDS = {"email", "first_name", "last_name", "current_streak", "best_streak", "last_streak_date"}

class UserRepository:
    def create(self, email: str, first_name: str | None = None, last_name: str | None = None) -> User:
        with db.get_session() as s:
            u = User(email=email.strip().lower(), first_name=first_name, last_name=last_name,
                     current_streak=0, best_streak=0)
            s.add(u)
            s.flush(); s.refresh(u); s.expunge(u)
            return u

    def get(self, user_id: int) -> User | None:
        with db.get_session() as s:
            u = s.get(User, user_id)
            if not u:
                return None
            s.expunge(u)
            return u

    def get_by_email(self, email: str) -> User | None:
        with db.get_session() as s:
            u = s.scalar(select(User).where(User.email == email.strip().lower()))
            if not u:
                return None
            s.expunge(u)
            return u

    def get_or_create(self, email: str, first_name: str | None = None, last_name: str | None = None) -> User:
        u = self.get_by_email(email)
        return u or self.create(email=email, first_name=first_name, last_name=last_name)

    def upsert(self, user_id: int, **fields) -> User:
        """Met à jour l'utilisateur `user_id` (ou le crée avec cet id s'il n'existe pas)."""
        unknown = set(fields) - _USER_FIELDS
        if unknown:
            raise TypeError(f"Champs utilisateur inconnus: {sorted(unknown)}")
        with db.get_session() as s:
            u = s.get(User, user_id)
            if u is None:
                if "email" not in fields:
                    raise NotFoundError(f"Utilisateur introuvable: {user_id}")
                u = User(id=user_id, current_streak=0, best_streak=0)
            for k, v in fields.items():
                setattr(u, k, v.strip().lower() if k == "email" else v)
            s.add(u); s.flush(); s.refresh(u); s.expunge(u)
            return u


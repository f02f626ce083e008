# app/persistence/db.py
# -*- coding: utf-8 -*-
from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager
import os

from app.config import DEFAULT_DB_URL
from app.errors import StoreError

DB_URL = os.getenv("DB_URL", DEFAULT_DB_URL)

engine = create_engine(DB_URL, echo=False, future=True)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite n'applique les clés étrangères que si on le demande, connexion par connexion
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,  # important pour éviter DetachedInstanceError
    future=True,
)

@contextmanager
def get_session():
    """
    Contexte gérant automatiquement commit/rollback.
    Toute erreur SQLAlchemy est annulée puis relevée en StoreError (chaînée).
    """
    s = SessionLocal()
    try:
        yield s
        s.commit()
    except SQLAlchemyError as e:
        s.rollback()
        raise StoreError(f"Échec du store: {e.__class__.__name__}") from e
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()

def init_db(Base, drop_and_recreate=False):
    """Crée les tables (et les recrée si demandé)."""
    try:
        if drop_and_recreate:
            Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        raise StoreError(f"Initialisation du schéma impossible: {e}") from e

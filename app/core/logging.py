# app/core/logging.py
# -*- coding: utf-8 -*-
import logging
import sys

from app.config import Settings

_configured = False


def setup_logging(settings: Settings) -> None:
    """Configure le logger racine (une seule fois : Streamlit ré-exécute les scripts)."""
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO), handlers=handlers)

    # Bibliothèques bavardes
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True

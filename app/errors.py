# app/errors.py
# -*- coding: utf-8 -*-
"""
Taxonomie d'erreurs du tracker.

- NotFoundError   : id inconnu (équivalent 404), pas de retry.
- ValidationError : entrée mal formée, levée AVANT tout accès au store.
- StoreError      : lecture/écriture du store en échec (I/O, contrainte, ...).
"""


class TrackerError(Exception):
    """Erreur de base du tracker."""


class NotFoundError(TrackerError, LookupError):
    """Entité introuvable."""


class ValidationError(TrackerError, ValueError):
    """Erreur de validation des données d'entrée."""


class StoreError(TrackerError, RuntimeError):
    """Échec du store ; la transaction a été annulée."""

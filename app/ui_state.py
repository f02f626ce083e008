# app/ui_state.py
# -*- coding: utf-8 -*-
"""
État partagé par les pages Streamlit.

Streamlit ré-exécute chaque script à chaque interaction : le tracker (et donc
les verrous par journée de son DayRecalculator) est construit une seule fois
par processus et partagé entre toutes les sessions.
"""
import streamlit as st

from app.bootstrap import build_tracker
from app.config import Settings, load_settings
from app.services.tracker_service import TrackerService


@st.cache_resource
def get_tracker() -> TrackerService:
    return build_tracker(load_settings())


def current_user_id(tracker: TrackerService, settings: Settings) -> int:
    """Utilisateur de la session (créé au premier accès)."""
    if "user_id" not in st.session_state or "user_email" not in st.session_state:
        u = tracker.ensure_user(settings.default_email)
        st.session_state["user_id"] = u.id
        st.session_state["user_email"] = u.email
    return st.session_state["user_id"]

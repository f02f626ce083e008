# app/pages/profil.py
# -*- coding: utf-8 -*-

# --- bootstrap import path (page streamlit dans app/pages) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -------------------------------------------------------------

import streamlit as st

from app.config import load_settings
from app.ui_state import current_user_id, get_tracker

st.set_page_config(page_title="Profil — Daily Tracker", page_icon="👤", layout="centered")
st.title("👤 Profil")

settings = load_settings()
tracker = get_tracker()
user_id = current_user_id(tracker, settings)
st.caption(f"Connecté en tant que **{st.session_state['user_email']}** (id={user_id})")

u = tracker.store.get_user(user_id)
colA, colB = st.columns(2)
with colA:
    st.subheader("Informations")
    st.write(f"**Email :** {u.email}")
    name = " ".join(x for x in (u.first_name, u.last_name) if x) or "—"
    st.write(f"**Nom :** {name}")
    st.write(f"**Créé le :** {u.created_at.strftime('%Y-%m-%d %H:%M') if u.created_at else '—'}")

with colB:
    st.subheader("Streak")
    st.metric("🔥 Actuel", u.current_streak)
    st.metric("🏆 Meilleur", u.best_streak)
    st.caption(f"Un jour compte quand le score global atteint {settings.streak_threshold}%.")
    if settings.streak_once_per_day:
        st.caption("Mode : un seul incrément par jour.")

# app/pages/historique.py
# -*- coding: utf-8 -*-

# --- bootstrap import path (page streamlit dans app/pages) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -------------------------------------------------------------

import datetime as dt
import io
import pandas as pd
import streamlit as st
import altair as alt

from app.config import load_settings
from app.errors import TrackerError
from app.ui_state import current_user_id, get_tracker

st.set_page_config(page_title="Historique — Daily Tracker", page_icon="📅", layout="wide")
st.title("📅 Historique")

settings = load_settings()
tracker = get_tracker()
user_id = current_user_id(tracker, settings)
st.caption(f"Connecté en tant que **{st.session_state['user_email']}** (id={user_id})")

# --- Filtres ---
st.sidebar.header("Période")
today = dt.date.today()
start = st.sidebar.date_input("Du", value=today - dt.timedelta(days=29))
end = st.sidebar.date_input("Au", value=today)

# Les jours sans cache sont calculés à la volée (jamais de streak ici)
try:
    rows = tracker.performance_range(user_id, start, end)
except TrackerError as e:
    st.error(str(e))
    st.stop()

df = pd.DataFrame([{
    "date": r.date,
    "tâches": r.tasks_score,
    "entraînement": r.workout_score,
    "mental": r.mind_score,
    "routines": r.routine_score,
    "dev": r.dev_score,
    "global": r.overall_score,
} for r in rows])

if df.empty:
    st.info("Aucune donnée dans cette période.")
    st.stop()

df["day"] = pd.to_datetime(df["date"]).dt.normalize()
df = df.sort_values("day")

# KPIs
col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Score global moyen", f"{df['global'].mean():.0f}%")
with col2:
    st.metric("Jours ≥ seuil", int((df["global"] >= settings.streak_threshold).sum()))
with col3:
    st.metric("Meilleur jour", f"{df['global'].max()}%")

# Chart score global (par jour) + ligne de seuil
base = alt.Chart(df).encode(
    x=alt.X("yearmonthdate(day):T", title="Jour", axis=alt.Axis(format="%Y-%m-%d", labelAngle=-45)),
)
line = base.mark_line(point=True).encode(
    y=alt.Y("global:Q", title="Score global", scale=alt.Scale(domain=[0, 100])),
    tooltip=[alt.Tooltip("day:T", title="Jour", format="%Y-%m-%d"), alt.Tooltip("global:Q")],
)
rule = alt.Chart(pd.DataFrame({"seuil": [settings.streak_threshold]})).mark_rule(strokeDash=[4, 4]).encode(y="seuil:Q")

st.subheader("Évolution du score global")
st.altair_chart((line + rule).properties(height=280), use_container_width=True)

# Scores par catégorie (format long)
cats = df.melt(id_vars="day", value_vars=["tâches", "entraînement", "mental", "routines", "dev"],
               var_name="catégorie", value_name="score")
cat_chart = (
    alt.Chart(cats)
    .mark_bar()
    .encode(
        x=alt.X("yearmonthdate(day):T", title="Jour", axis=alt.Axis(format="%Y-%m-%d", labelAngle=-45)),
        y=alt.Y("score:Q", title="Score"),
        color=alt.Color("catégorie:N", title=""),
        xOffset="catégorie:N",
        tooltip=[alt.Tooltip("day:T", title="Jour", format="%Y-%m-%d"), "catégorie:N", "score:Q"],
    )
    .properties(height=280)
)
st.subheader("Scores par catégorie")
st.altair_chart(cat_chart, use_container_width=True)

st.dataframe(df.drop(columns=["day"]), use_container_width=True)

# Export CSV
csv_buf = io.StringIO()
df.drop(columns=["day"]).to_csv(csv_buf, index=False)
st.download_button("⬇️ Export CSV", data=csv_buf.getvalue(),
                   file_name=f"performance_{start}_{end}.csv", mime="text/csv")

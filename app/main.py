# app/main.py
# -*- coding: utf-8 -*-
# --- bootstrap import path (run as script via streamlit) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -----------------------------------------------------------
import datetime as dt
import pandas as pd
import streamlit as st

from app.config import load_settings
from app.errors import TrackerError
from app.services.score_engine import day_of_week, relevant_routines, interpret_overall
from app.ui_state import current_user_id, get_tracker

# ---------------------------------------------------------------------
# Bootstrapping
# ---------------------------------------------------------------------
st.set_page_config(page_title="Daily Tracker", page_icon="📈", layout="wide")

settings = load_settings()
tracker = get_tracker()
store = tracker.store
user_id = current_user_id(tracker, settings)
st.caption(f"Connecté en tant que **{st.session_state['user_email']}** (id={user_id})")

# ---------------------------------------------------------------------
# Sélection du jour + scores
# ---------------------------------------------------------------------
st.title("📈 Daily Tracker — Tableau de bord")

day = st.sidebar.date_input("Jour", value=dt.date.today())
dow = day_of_week(day)
# Les routines hebdo sont évaluées selon le jour courant, quel que soit le jour affiché
scoring_dow = tracker.recalculator.scoring_day_of_week()

perf = tracker.daily_performance(user_id, day)
user = store.get_user(user_id)

cols = st.columns(6)
for col, (label, value) in zip(cols, [
    ("Tâches", perf.tasks_score),
    ("Entraînement", perf.workout_score),
    ("Mental", perf.mind_score),
    ("Routines", perf.routine_score),
    ("Dev", perf.dev_score),
    ("Global", perf.overall_score),
]):
    col.metric(label, f"{value}%")

c1, c2 = st.columns(2)
c1.metric("🔥 Streak actuel", user.current_streak if user else 0)
c2.metric("🏆 Meilleur streak", user.best_streak if user else 0)
st.info(interpret_overall(perf.overall_score, settings.streak_threshold))


def _run(fn, *args, **kwargs):
    """Exécute une mutation et relance la page ; affiche les erreurs métier."""
    try:
        fn(*args, **kwargs)
    except TrackerError as e:
        st.error(str(e))
        return
    st.rerun()


def _done_map(logs, parent_field):
    return {getattr(l, parent_field): l.completed for l in logs}


tab_tasks, tab_workout, tab_mind, tab_routine, tab_dev, tab_water = st.tabs(
    ["✅ Tâches", "🏋️ Entraînement", "🧠 Mental", "🌅 Routines", "💻 Dev", "💧 Eau"]
)

# ---------------------------------------------------------------------
# Tâches
# ---------------------------------------------------------------------
with tab_tasks:
    with st.form("add_task", clear_on_submit=True):
        title = st.text_input("Nouvelle tâche")
        due = st.text_input("Heure (HH:MM, optionnelle)", value="")
        if st.form_submit_button("Ajouter"):
            _run(tracker.add_task, user_id, day, title, due_time=due.strip() or None)

    for t in store.tasks.list_for_day(user_id, day):
        a, b = st.columns([6, 1])
        label = f"{t.due_time} — {t.title}" if t.due_time else t.title
        checked = a.checkbox(label, value=t.completed, key=f"task_{t.id}")
        if checked != t.completed:
            _run(tracker.set_task_completed, t.id, checked)
        if b.button("🗑️", key=f"del_task_{t.id}"):
            _run(tracker.delete_task, t.id)

# ---------------------------------------------------------------------
# Entraînement (exercices du jour, tous plans confondus)
# ---------------------------------------------------------------------
with tab_workout:
    done = _done_map(store.workout_logs.list_for_day(user_id, day), "exercise_id")
    for plan in store.workout_plans.list_plans(user_id):
        exercises = store.workout_plans.list_exercises(plan.id, day_of_week=dow)
        if not exercises:
            continue
        st.subheader(plan.name)
        for e in exercises:
            details = " × ".join(str(x) for x in (e.sets, e.reps) if x) or (e.duration or "")
            checked = st.checkbox(f"{e.name} {details}".strip(), value=done.get(e.id, False), key=f"ex_{e.id}")
            if checked != done.get(e.id, False):
                _run(tracker.set_workout_done, user_id, day, e.id, checked)

# ---------------------------------------------------------------------
# Exercices mentaux
# ---------------------------------------------------------------------
with tab_mind:
    done = _done_map(store.mind_logs.list_for_day(user_id, day), "mind_exercise_id")
    for m in store.mind_exercises.list_for_user(user_id):
        label = f"{m.time} — {m.name}" + (f" ({m.duration} min)" if m.duration else "")
        checked = st.checkbox(label, value=done.get(m.id, False), key=f"mind_{m.id}")
        if checked != done.get(m.id, False):
            _run(tracker.set_mind_done, user_id, day, m.id, checked)

# ---------------------------------------------------------------------
# Routines (matin, soir, hebdo du jour)
# ---------------------------------------------------------------------
with tab_routine:
    done = _done_map(store.routine_logs.list_for_day(user_id, day), "routine_id")
    if day != tracker.recalculator.clock():
        st.caption("Routines hebdo : celles d'aujourd'hui, comme dans le calcul du score.")
    routines = relevant_routines(store.routines.list_for_user(user_id), scoring_dow)
    for kind, title in (("morning", "Matin"), ("night", "Soir"), ("weekly", "Hebdo")):
        items = [r for r in routines if r.type == kind]
        if not items:
            continue
        st.subheader(title)
        for r in items:
            checked = st.checkbox(r.name, value=done.get(r.id, False), key=f"routine_{r.id}", help=r.description)
            if checked != done.get(r.id, False):
                _run(tracker.set_routine_done, user_id, day, r.id, checked)

# ---------------------------------------------------------------------
# Objectifs de développement (seuls les « daily » comptent dans le score)
# ---------------------------------------------------------------------
with tab_dev:
    logs = {l.dev_goal_id: l for l in store.dev_goal_logs.list_for_day(user_id, day)}
    goals = store.dev_goals.list_for_user(user_id)
    for g in [g for g in goals if g.type == "daily"]:
        log = logs.get(g.id)
        a, b = st.columns([5, 2])
        checked = a.checkbox(g.title, value=bool(log and log.completed), key=f"dev_{g.id}")
        hours = b.number_input("Heures", min_value=0, step=1, value=log.hours_spent if log else 0, key=f"dev_h_{g.id}")
        if checked != bool(log and log.completed) or hours != (log.hours_spent if log else 0):
            _run(tracker.log_dev_goal, user_id, day, g.id, checked, hours_spent=int(hours))

    others = [g for g in goals if g.type != "daily"]
    if others:
        with st.expander("Objectifs hebdo / mensuels / annuels"):
            st.dataframe(pd.DataFrame([{
                "type": g.type, "objectif": g.title, "cible (h)": g.target_hours,
            } for g in others]), use_container_width=True)

# ---------------------------------------------------------------------
# Hydratation
# ---------------------------------------------------------------------
with tab_water:
    intake = store.water.get(user_id, day)
    amount = intake.amount if intake else 0
    target = intake.target if intake else settings.water_target_ml
    st.progress(min(1.0, amount / target) if target else 0.0, text=f"{amount} / {target} ml")
    a, b = st.columns(2)
    if a.button("+250 ml"):
        _run(tracker.set_water_intake, user_id, day, amount=amount + 250, target=target)
    if b.button("Remise à zéro"):
        _run(tracker.set_water_intake, user_id, day, amount=0, target=target)

# scripts/seed_local_data.py
# -*- coding: utf-8 -*-
"""
Seed local du tracker : précharge les définitions par défaut et, en option,
un historique aléatoire de logs.

Caractéristiques :
- Préchargement idempotent : ignoré si l'utilisateur a déjà des exercices mentaux
- Historique (--days) : tâches + logs aléatoires, performance calculée via l'agrégateur
  (les streaks ne sont jamais touchés par le seed)
- Option (--wipe) pour drop+recreate le schéma (utile en dev)

Exemples :
    # Préchargement seul
    python scripts/seed_local_data.py

    # 30 jours d'historique reproductible, base remise à zéro
    python scripts/seed_local_data.py --days 30 --seed 42 --wipe

    # Date de fin (YYYY-MM-DD)
    python scripts/seed_local_data.py --days 14 --end 2025-10-01
"""

from __future__ import annotations

import argparse
import datetime as dt
import logging
import os
import random
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app.bootstrap import build_tracker
from app.config import load_settings
from app.services import performance_service
from app.services.score_engine import day_of_week, relevant_routines

logger = logging.getLogger("seed")


# -------------------------------------------------------------------
# Définitions par défaut
# -------------------------------------------------------------------

# Un plan hebdo = 7 listes (0 = dimanche .. 6 = samedi) de (nom, sets, reps, durée)
WORKOUT_PLANS = [
    ("30-Day Gripper & Forearm Vein Plan (Arm Workout Weekly)", 30, [
        [("Hot/cold water contrast", None, None, "5 min"), ("Stretch forearms, fingers, wrists", None, None, "3 min"),
         ("Gentle hand circles", 2, 20, None)],
        [("Gripper Fast Reps", 4, 50, None), ("Slow Squeeze Gripper", 3, 15, None),
         ("Towel Twist (dry towel full power)", 2, None, "1 min"), ("Shake & Stretch", None, None, "2 min")],
        [("Heavy Gripper (tight squeeze)", 3, 10, None), ("Gripper Close-Hold", 3, None, "30 sec"),
         ("Wrist Curl (bottle/brick)", 3, 15, None), ("Reverse Curl", 3, 15, None)],
        [("Easy Gripper", 2, 30, None), ("Wrist Mobility Circles", None, None, "2 min"),
         ("Finger Flex-Extend", 1, 50, None)],
        [("Gripper Explosives", 3, 20, None), ("Pinch Grip", 3, None, "30 sec"),
         ("Farmer Carry (bucket or bag)", 3, None, "1 min")],
        [("Rubber Band Finger Opens", 3, 20, None), ("Reverse Wrist Curl", 3, 20, None),
         ("Light Gripper", 2, 20, None)],
        [("Gripper Max Reps (record reps)", 1, None, None), ("Close & Hold", 1, None, "45 sec"),
         ("Farmer's Hold", 1, None, "1 min")],
    ]),
    ("Smart & Balanced 7-Day Full Body Workout Weekly", 45, [
        [("Hanging", 1, None, "1 min"), ("Cobra Stretch", 2, None, "30 sec"), ("Light walk", None, None, "10 min")],
        [("Normal Push-Ups", 4, 25, None), ("Pike Push-Ups", 3, 15, None), ("Bench Dips", 3, 25, None),
         ("Plank", None, None, "5 min")],
        [("Pull-Ups / Assisted", 4, 12, None), ("Towel Rows", 3, 20, None), ("Farmer Hold", 2, None, "45 sec")],
        [("Squats", 4, 25, None), ("Lunges", 3, 20, None), ("Calf Raises", 4, 30, None),
         ("Wall Sit", 2, None, "45 sec")],
        [("Crunches", 3, 25, None), ("Leg Raises", 3, 25, None), ("Plank", 3, None, "1 min"),
         ("Russian Twists", 3, 30, None)],
        [("Clap Pushups", 3, 15, None), ("Skipping", None, None, "5 min"), ("Hanging", 3, None, "1 min")],
        [("Archer Pushups", 2, 12, None), ("Squats", 2, 25, None), ("Hanging", 2, None, "1 min")],
    ]),
]

MIND_EXERCISES = [
    ("Box Breathing + Sense Drill", "05:40", 15),
    ("Memory Palace Practice", "06:00", 20),
    ("Brain Challenge (riddle/puzzle)", "08:00", 10),
    ("Pattern Recognition Task", "12:00", 10),
    ("Recall & Visualization", "16:00", 15),
    ("Mental Map Review", "19:00", 15),
    ("Mind Wind-Down", "21:30", 10),
]

# (nom, description, type, jour) ; jour uniquement pour les routines hebdo
ROUTINES = [
    ("Lemon & Honey Detox Drink", "Start the day with detox", "morning", None),
    ("Ice Cubes on Face", "Wake up and refresh", "morning", None),
    ("Face & Body Wash", "Clean and fresh start", "morning", None),
    ("Moisturizer + SPF 50+ sunscreen", "Protect your skin", "morning", None),
    ("Face & Body Cleansing", "Clean off the day", "night", None),
    ("Face Serum", "Nourish your skin", "night", None),
    ("Moisturizer", "Hydrate overnight", "night", None),
    ("Lip Scrub", "Tue/Thu/Sat", "weekly", 2),
    ("Exfoliation", "Sun/Wed/Fri", "weekly", 0),
    ("Lemon & Baking Soda", "Mon/Fri", "weekly", 1),
    ("Hair Oil Massage + Wash", "Wed/Sat", "weekly", 3),
]

DEV_GOALS = [
    ("Full Stack Goal", "Master HTML, CSS, JS, React, Node, Mongo", "yearly", 1000),
    ("React Mastery", "Complete React fundamentals and advanced concepts", "monthly", 60),
    ("Complete React Router tutorial", "Learn routing in React applications", "weekly", 3),
    ("Solve 5 LeetCode problems", "Practice algorithmic thinking", "weekly", 5),
    ("DSA Practice (1-1.5h)", "Data structures and algorithms", "daily", 1),
    ("LeetCode (30-45min)", "Coding practice", "daily", 1),
    ("React/WebDev (1-1.5h)", "Frontend development", "daily", 1),
    ("Project Building (1h)", "Work on personal projects", "daily", 1),
    ("GitHub update/notes (15min)", "Document progress", "daily", 0),
]

TASK_TITLES = ["Répondre aux emails", "Courses", "Lire 20 pages", "Appeler la famille",
               "Ranger le bureau", "Préparer la semaine", "Payer les factures"]


def daterange(end: dt.date, days: int):
    """Génère des dates [end - (days-1) .. end] incluses, en ordre croissant."""
    for i in range(days):
        yield end - dt.timedelta(days=(days - 1 - i))


# -------------------------------------------------------------------
# Seeding
# -------------------------------------------------------------------

def preload(tracker, user_id: int) -> bool:
    """Crée les définitions par défaut. Retourne False si déjà présentes."""
    store = tracker.store
    if store.get_mind_exercises(user_id):
        return False

    for name, max_time, days in WORKOUT_PLANS:
        plan = tracker.create_workout_plan(user_id, name, is_weekly=True, max_time=max_time)
        for dow, exercises in enumerate(days):
            for idx, (ex_name, sets, reps, duration) in enumerate(exercises):
                tracker.add_exercise(plan.id, ex_name, sets=sets, reps=reps, duration=duration,
                                     day_of_week=dow, order_index=idx)

    for idx, (name, time, duration) in enumerate(MIND_EXERCISES):
        tracker.create_mind_exercise(user_id, name, time, duration=duration, order_index=idx)

    for idx, (name, description, kind, dow) in enumerate(ROUTINES):
        tracker.create_routine(user_id, name, kind, description=description, day_of_week=dow, order_index=idx)

    for idx, (title, description, kind, hours) in enumerate(DEV_GOALS):
        tracker.create_dev_goal(user_id, title, kind, description=description, target_hours=hours, order_index=idx)

    return True


def seed_history(tracker, user_id: int, *, days: int, end_date: dt.date, diligence: float) -> int:
    """
    Écrit directement dans les repositories (pas de streak), puis calcule la
    performance de chaque jour via l'agrégateur. Retourne le nombre de jours.
    """
    store = tracker.store
    plans = store.workout_plans.list_plans(user_id)
    minds = store.mind_exercises.list_for_user(user_id)
    routines = store.routines.list_for_user(user_id)
    daily_goals = [g for g in store.dev_goals.list_for_user(user_id) if g.type == "daily"]
    dow_today = day_of_week(dt.date.today())

    def done() -> bool:
        return random.random() < diligence

    count = 0
    for day in daterange(end=end_date, days=days):
        dow = day_of_week(day)
        for title in random.sample(TASK_TITLES, k=random.randint(2, 5)):
            t = store.tasks.add(user_id, day, title)
            if done():
                store.tasks.update(t.id, completed=True)
        for plan in plans:
            for e in store.workout_plans.list_exercises(plan.id, day_of_week=dow):
                store.workout_logs.set_status(user_id, day, e.id, done())
        for m in minds:
            store.mind_logs.set_status(user_id, day, m.id, done())
        for r in relevant_routines(routines, dow):
            store.routine_logs.set_status(user_id, day, r.id, done())
        for g in daily_goals:
            ok = done()
            store.dev_goal_logs.set_status(user_id, day, g.id, ok, hours_spent=random.randint(1, 2) if ok else 0)
        store.water.upsert(user_id, day, amount=random.randrange(1000, 3750, 250))

        performance_service.aggregate(store, user_id, day, dow=dow_today)
        count += 1
    return count


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------

def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed local data for the daily tracker")
    p.add_argument("--email", type=str, default=None, help="Email de l'utilisateur (défaut: TRACKER_DEFAULT_EMAIL)")
    p.add_argument("--days", type=int, default=0, help="Jours d'historique à générer (défaut: 0)")
    p.add_argument("--end", type=str, default=None, help="Date de fin (YYYY-MM-DD). Défaut: hier")
    p.add_argument("--diligence", type=float, default=0.75, help="Probabilité de compléter un item (0..1)")
    p.add_argument("--seed", type=int, default=None, help="Seed du générateur aléatoire pour reproductibilité")
    p.add_argument("--wipe", action="store_true", help="Drop + recreate la base avant seeding")
    return p.parse_args()


def main():
    args = parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    settings = load_settings()
    tracker = build_tracker(settings, drop_and_recreate=bool(args.wipe))
    if args.wipe:
        logger.warning("Wipe : schéma supprimé puis recréé")

    user = tracker.ensure_user(args.email or settings.default_email, first_name="User", last_name="One")
    if preload(tracker, user.id):
        logger.info("Définitions par défaut préchargées pour %s", user.email)
    else:
        logger.info("Définitions déjà présentes pour %s, préchargement ignoré", user.email)

    if args.days > 0:
        end_date = dt.date.fromisoformat(args.end) if args.end else dt.date.today() - dt.timedelta(days=1)
        n = seed_history(tracker, user.id, days=args.days, end_date=end_date,
                         diligence=max(0.0, min(1.0, args.diligence)))
        logger.info("Historique : %d jour(s) jusqu'au %s", n, end_date.isoformat())


if __name__ == "__main__":
    main()

# app/persistence/store.py
# -*- coding: utf-8 -*-
"""
Contrat étroit lu/écrit par le moteur d'agrégation, adossé aux repositories SQL.

Le moteur ne dépend que de ces noms de méthodes : n'importe quel objet qui les
expose (ex. un faux store en mémoire dans les tests) peut le remplacer.
"""
from app.persistence.repositories.users_repo import UserRepository
from app.persistence.repositories.tasks_repo import TaskRepository
from app.persistence.repositories.definitions_repo import (
    WorkoutPlanRepository, MindExerciseRepository, RoutineRepository, DevGoalRepository,
)
from app.persistence.repositories.logs_repo import (
    WorkoutLogRepository, MindExerciseLogRepository, RoutineLogRepository, DevGoalLogRepository,
)
from app.persistence.repositories.water_repo import WaterIntakeRepository
from app.persistence.repositories.performance_repo import DailyPerformanceRepository


class SqlEntityStore:
    def __init__(self) -> None:
        self.users = UserRepository()
        self.tasks = TaskRepository()
        self.workout_plans = WorkoutPlanRepository()
        self.mind_exercises = MindExerciseRepository()
        self.routines = RoutineRepository()
        self.dev_goals = DevGoalRepository()
        self.workout_logs = WorkoutLogRepository()
        self.mind_logs = MindExerciseLogRepository()
        self.routine_logs = RoutineLogRepository()
        self.dev_goal_logs = DevGoalLogRepository()
        self.water = WaterIntakeRepository()
        self.performance = DailyPerformanceRepository()

    # --- lectures (user, date) ---
    def get_tasks(self, user_id, date):
        return self.tasks.list_for_day(user_id, date)

    def get_workout_logs(self, user_id, date):
        return self.workout_logs.list_for_day(user_id, date)

    def get_mind_exercise_logs(self, user_id, date):
        return self.mind_logs.list_for_day(user_id, date)

    def get_routine_logs(self, user_id, date):
        return self.routine_logs.list_for_day(user_id, date)

    def get_dev_goal_logs(self, user_id, date):
        return self.dev_goal_logs.list_for_day(user_id, date)

    # --- définitions (toutes dates) ---
    def get_mind_exercises(self, user_id):
        return self.mind_exercises.list_for_user(user_id)

    def get_routines(self, user_id):
        return self.routines.list_for_user(user_id)

    def get_dev_goals(self, user_id):
        return self.dev_goals.list_for_user(user_id)

    def get_user(self, user_id):
        return self.users.get(user_id)

    # --- performance (cache) ---
    def get_daily_performance(self, user_id, date):
        return self.performance.get(user_id, date)

    def get_daily_performance_range(self, user_id, start_date, end_date):
        return self.performance.get_range(user_id, start=start_date, end=end_date, asc=True)

    # --- écritures ---
    def upsert_daily_performance(self, user_id, date, **scores):
        return self.performance.upsert(user_id, date, **scores)

    def upsert_user(self, user_id, **fields):
        return self.users.upsert(user_id, **fields)

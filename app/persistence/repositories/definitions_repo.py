# app/persistence/repositories/definitions_repo.py
# -*- coding: utf-8 -*-
"""
Définitions permanentes (indépendantes de la date) : plans d'entraînement,
exercices mentaux, routines, objectifs de développement.
"""
from sqlalchemy import select, and_, or_
from app.errors import NotFoundError
from app.persistence import db
from app.persistence.models import WorkoutType, Exercise, MindExercise, Routine, DevGoal


def _list(model, *where, order_by=None):
    with db.get_session() as s:
        stmt = select(model).where(*where)
        if order_by is not None:
            stmt = stmt.order_by(*order_by)
        rows = list(s.scalars(stmt))
        for r in rows:
            s.expunge(r)
        return rows


def _create(obj):
    with db.get_session() as s:
        s.add(obj); s.flush(); s.refresh(obj); s.expunge(obj)
        return obj


class WorkoutPlanRepository:
    def create_plan(self, user_id: int, name: str, is_weekly: bool = True, max_time: int | None = None) -> WorkoutType:
        return _create(WorkoutType(user_id=user_id, name=name, is_weekly=is_weekly, max_time=max_time))

    def list_plans(self, user_id: int) -> list[WorkoutType]:
        return _list(WorkoutType, WorkoutType.user_id == user_id, order_by=(WorkoutType.id,))

    def add_exercise(self, workout_type_id: int, name: str, *, sets: int | None = None, reps: int | None = None,
                     duration: str | None = None, day_of_week: int | None = None, order_index: int = 0) -> Exercise:
        with db.get_session() as s:
            if s.get(WorkoutType, workout_type_id) is None:
                raise NotFoundError(f"Plan d'entraînement introuvable: {workout_type_id}")
            e = Exercise(workout_type_id=workout_type_id, name=name, sets=sets, reps=reps,
                         duration=duration, day_of_week=day_of_week, order_index=order_index)
            s.add(e); s.flush(); s.refresh(e); s.expunge(e)
            return e

    def list_exercises(self, workout_type_id: int, day_of_week: int | None = None) -> list[Exercise]:
        """Exercices d'un plan ; avec `day_of_week`, ceux du jour + ceux « tous les jours » (NULL)."""
        where = [Exercise.workout_type_id == workout_type_id]
        if day_of_week is not None:
            where.append(or_(Exercise.day_of_week == day_of_week, Exercise.day_of_week.is_(None)))
        return _list(Exercise, and_(*where), order_by=(Exercise.order_index, Exercise.id))


class MindExerciseRepository:
    def create(self, user_id: int, name: str, time: str, duration: int | None = None, order_index: int = 0) -> MindExercise:
        return _create(MindExercise(user_id=user_id, name=name, time=time, duration=duration, order_index=order_index))

    def list_for_user(self, user_id: int) -> list[MindExercise]:
        return _list(MindExercise, MindExercise.user_id == user_id,
                     order_by=(MindExercise.time, MindExercise.order_index))


class RoutineRepository:
    def create(self, user_id: int, name: str, type: str, *, description: str | None = None,
               day_of_week: int | None = None, order_index: int = 0) -> Routine:
        return _create(Routine(user_id=user_id, name=name, type=type, description=description,
                               day_of_week=day_of_week, order_index=order_index))

    def list_for_user(self, user_id: int) -> list[Routine]:
        return _list(Routine, Routine.user_id == user_id, order_by=(Routine.type, Routine.order_index))


class DevGoalRepository:
    def create(self, user_id: int, title: str, type: str, *, description: str | None = None,
               target_hours: int | None = None, order_index: int = 0) -> DevGoal:
        return _create(DevGoal(user_id=user_id, title=title, type=type, description=description,
                               target_hours=target_hours, current_hours=0, completed=False,
                               order_index=order_index))

    def list_for_user(self, user_id: int) -> list[DevGoal]:
        return _list(DevGoal, DevGoal.user_id == user_id, order_by=(DevGoal.type, DevGoal.order_index))

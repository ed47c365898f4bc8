from __future__ import annotations # for forward references

import logging
from typing import Optional

from sqlalchemy import select, update, delete # queries
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .db import SessionLocal # Session management
from .models import User, UserRole, Plan, Workout, Exercise # ORM models
from .schemas import PlanCreate, WorkoutCreate, WorkoutUpdate, ExerciseCreate, ExerciseUpdate
from .errors import NotFound, DuplicateUsername
from .auth import hash_password

logger = logging.getLogger(__name__)

# Every mutating helper takes owner_id:
#   None  -> unscoped (admin)
#   <int> -> the statement only matches rows whose plan belongs to that user
# so the ownership check and the write are one statement.
# Bulk statements skip session sync, reads below use populate_existing instead.

def _scope_plan(stmt, owner_id: Optional[int]):
    if owner_id is None:
        return stmt
    return stmt.where(Plan.user_id == owner_id)

def _scope_workout(stmt, owner_id: Optional[int]):
    if owner_id is None:
        return stmt
    return stmt.where(Workout.plan_id.in_(select(Plan.id).where(Plan.user_id == owner_id)))

def _scope_exercise(stmt, owner_id: Optional[int]):
    if owner_id is None:
        return stmt
    owned = (
        select(Workout.id)
        .join(Plan, Plan.id == Workout.plan_id)
        .where(Plan.user_id == owner_id)
    )
    return stmt.where(Exercise.workout_id.in_(owned))


# Users

def create_user(username: str, password: str, *, role: UserRole = UserRole.user, db: Optional[Session] = None) -> User:
    owns_session = db is None
    db = db or SessionLocal() # either makes a db or uses passed one
    try:
        taken = db.execute(select(User.id).where(User.username == username)).scalar_one_or_none()
        if taken is not None:
            raise DuplicateUsername()
        user = User(username=username, password_hash=hash_password(password), role=role)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration
            db.rollback()
            raise DuplicateUsername()
        db.refresh(user)
        return user
    finally:
        if owns_session:
            db.close()

def get_user_by_username(username: str, *, db: Optional[Session] = None) -> Optional[User]:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        return db.execute(select(User).where(User.username == username)).scalars().first()
    finally:
        if owns_session:
            db.close()


# Plans

def create_plan(data: PlanCreate, *, user_id: int, db: Optional[Session] = None) -> Plan:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        plan = Plan(
            title=data.title,
            length=data.length,
            coach=data.coach,
            description=data.description,
            user_id=user_id,
        )
        db.add(plan) # puts in session
        db.commit() # writes row and finalises
        db.refresh(plan)
        return plan
    finally:
        if owns_session:
            db.close()

def list_plans(*, db: Optional[Session] = None) -> list[Plan]:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        return list(db.execute(select(Plan).order_by(Plan.id.asc()).execution_options(populate_existing=True)).scalars().all())
    finally:
        if owns_session:
            db.close()

def get_plan(plan_id: int, *, db: Optional[Session] = None) -> Plan:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        plan = db.execute(select(Plan).where(Plan.id == plan_id).execution_options(populate_existing=True)).scalars().first()
        if plan is None:
            raise NotFound("Plan not found")
        return plan
    finally:
        if owns_session:
            db.close()

def update_plan(plan_id: int, data: PlanCreate, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> Plan:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        stmt = _scope_plan(update(Plan).where(Plan.id == plan_id), owner_id)
        stmt = (
            stmt
            .values(title=data.title, length=data.length, coach=data.coach, description=data.description)
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        if result.rowcount == 0:
            db.rollback()
            raise NotFound("Plan not found")
        db.commit()
        return get_plan(plan_id, db=db)
    finally:
        if owns_session:
            db.close()

def delete_plan(plan_id: int, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> None:
    """
    Delete a plan and everything under it, child -> parent order, one transaction.
    """
    owns_session = db is None
    db = db or SessionLocal()
    try:
        result = db.execute(
            _scope_plan(select(Plan.id).where(Plan.id == plan_id), owner_id)
        ).scalar_one_or_none()
        if result is None:
            raise NotFound("Plan not found")

        workout_ids = select(Workout.id).where(Workout.plan_id == plan_id)
        db.execute(
            delete(Exercise).where(Exercise.workout_id.in_(workout_ids))
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Workout).where(Workout.plan_id == plan_id)
            .execution_options(synchronize_session=False)
        )
        deleted = db.execute(
            _scope_plan(delete(Plan).where(Plan.id == plan_id), owner_id)
            .execution_options(synchronize_session=False)
        )
        if deleted.rowcount == 0:
            db.rollback()
            raise NotFound("Plan not found")
        db.commit()
        logger.info("Deleted plan id=%s with its workouts and exercises", plan_id)
    finally:
        if owns_session:
            db.close()


# Workouts

def create_workout(data: WorkoutCreate, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> Workout:
    owns_session = db is None
    db = db or SessionLocal()
    try: # Checking if parent exists (and still belongs to the caller)
        parent = db.execute(
            _scope_plan(select(Plan.id).where(Plan.id == data.plan_id), owner_id)
        ).scalar_one_or_none()
        if parent is None:
            raise NotFound("Plan not found")

        w = Workout(
            plan_id=parent,
            name=data.name,
            length=data.length,
            type=data.type,
            frequency=data.frequency,
        )
        db.add(w)
        db.commit()
        db.refresh(w)
        return w
    finally:
        if owns_session:
            db.close()

def list_workouts(*, plan_id: Optional[int] = None, db: Optional[Session] = None) -> list[Workout]:
    """
    All workouts, or only those of one plan when plan_id is given.
    Raises NotFound if that plan doesn't exist.
    """
    owns_session = db is None
    db = db or SessionLocal()
    try:
        q = select(Workout).order_by(Workout.id.asc()).execution_options(populate_existing=True)
        if plan_id is not None:
            get_plan(plan_id, db=db)
            q = q.where(Workout.plan_id == plan_id)
        return list(db.execute(q).scalars().all())
    finally:
        if owns_session:
            db.close()

def get_workout(workout_id: int, *, db: Optional[Session] = None) -> Workout:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        w = db.execute(select(Workout).where(Workout.id == workout_id).execution_options(populate_existing=True)).scalars().first()
        if w is None:
            raise NotFound("Workout not found")
        return w
    finally:
        if owns_session:
            db.close()

def update_workout(workout_id: int, data: WorkoutUpdate, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> Workout:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        stmt = _scope_workout(update(Workout).where(Workout.id == workout_id), owner_id)
        stmt = (
            stmt
            .values(name=data.name, length=data.length, type=data.type, frequency=data.frequency)
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        if result.rowcount == 0:
            db.rollback()
            raise NotFound("Workout not found")
        db.commit()
        return get_workout(workout_id, db=db)
    finally:
        if owns_session:
            db.close()

def delete_workout(workout_id: int, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> None:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        found = db.execute(
            _scope_workout(select(Workout.id).where(Workout.id == workout_id), owner_id)
        ).scalar_one_or_none()
        if found is None:
            raise NotFound("Workout not found")

        db.execute(
            delete(Exercise).where(Exercise.workout_id == workout_id)
            .execution_options(synchronize_session=False)
        )
        deleted = db.execute(
            _scope_workout(delete(Workout).where(Workout.id == workout_id), owner_id)
            .execution_options(synchronize_session=False)
        )
        if deleted.rowcount == 0:
            db.rollback()
            raise NotFound("Workout not found")
        db.commit()
        logger.info("Deleted workout id=%s with its exercises", workout_id)
    finally:
        if owns_session:
            db.close()


# Exercises

def create_exercise(data: ExerciseCreate, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> Exercise:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        parent = db.execute(
            _scope_workout(select(Workout.id).where(Workout.id == data.workout_id), owner_id)
        ).scalar_one_or_none()
        if parent is None:
            raise NotFound("Workout not found")

        ex = Exercise(
            workout_id=parent,
            name=data.name,
            sets=data.sets,
            reps=data.reps,
            rest_time=data.rest_time,
            tips=data.tips,
        )
        db.add(ex)
        db.commit()
        db.refresh(ex)
        return ex
    finally:
        if owns_session:
            db.close()

def list_exercises(*, workout_id: Optional[int] = None, db: Optional[Session] = None) -> list[Exercise]:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        q = select(Exercise).order_by(Exercise.id.asc()).execution_options(populate_existing=True)
        if workout_id is not None:
            get_workout(workout_id, db=db)
            q = q.where(Exercise.workout_id == workout_id)
        return list(db.execute(q).scalars().all())
    finally:
        if owns_session:
            db.close()

def get_exercise(exercise_id: int, *, db: Optional[Session] = None) -> Exercise:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        ex = db.execute(select(Exercise).where(Exercise.id == exercise_id).execution_options(populate_existing=True)).scalars().first()
        if ex is None:
            raise NotFound("Exercise not found")
        return ex
    finally:
        if owns_session:
            db.close()

def update_exercise(exercise_id: int, data: ExerciseUpdate, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> Exercise:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        stmt = _scope_exercise(update(Exercise).where(Exercise.id == exercise_id), owner_id)
        stmt = (
            stmt
            .values(name=data.name, sets=data.sets, reps=data.reps, rest_time=data.rest_time, tips=data.tips)
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        if result.rowcount == 0:
            db.rollback()
            raise NotFound("Exercise not found")
        db.commit()
        return get_exercise(exercise_id, db=db)
    finally:
        if owns_session:
            db.close()

def delete_exercise(exercise_id: int, *, owner_id: Optional[int] = None, db: Optional[Session] = None) -> None:
    owns_session = db is None
    db = db or SessionLocal()
    try:
        deleted = db.execute(
            _scope_exercise(delete(Exercise).where(Exercise.id == exercise_id), owner_id)
            .execution_options(synchronize_session=False)
        )
        if deleted.rowcount == 0:
            db.rollback()
            raise NotFound("Exercise not found")
        db.commit()
    finally:
        if owns_session:
            db.close()

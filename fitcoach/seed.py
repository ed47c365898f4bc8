from __future__ import annotations
import argparse
import logging
import random
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from .db import SessionLocal, init_db
from .models import User, UserRole, Plan, Workout, Exercise
from .auth import hash_password
from . import crud
from .schemas import PlanCreate, WorkoutCreate, ExerciseCreate

logger = logging.getLogger(__name__)

DEFAULT_RNG_SEED = 1337

PLAN_TEMPLATES = [
    ("5K Plan", "Beginner 5K"),
    ("Strength Base", "Full body strength foundation"),
    ("Half Marathon", "Build to 21.1km"),
    ("Mobility Reset", "Daily mobility and core"),
]
WORKOUT_TYPES = ["run", "strength", "mobility", "cross"]
EXERCISES = ["Squat", "Deadlift", "Push-up", "Lunge", "Plank", "Row", "Hill sprint", "Step-up"]
COACHES = ["Ana", "Ben", "Chris", "Dee"]


def wipe_data(db: Session) -> None:
    """
    Delete rows from child -> parent order.
    Doesn't drop tables.
    """
    db.execute(delete(Exercise))
    db.execute(delete(Workout))
    db.execute(delete(Plan))
    db.execute(delete(User))
    db.commit()


def ensure_admin(db: Session, username: str, password: str) -> User:
    """
    Creates the admin account if missing; ensures role is admin.
    This is the only way an admin comes into existence.
    """
    user = db.execute(select(User).where(User.username == username)).scalars().first()
    if user is None:
        user = crud.create_user(username, password, role=UserRole.admin, db=db)
    elif user.role != UserRole.admin:
        user.role = UserRole.admin
        user.password_hash = hash_password(password)
        db.commit()
        db.refresh(user)
    return user


def create_users(db: Session, count: int) -> list[User]:
    """
    Create N users with predictable usernames as well as password 'changeme'
    """
    users: list[User] = []
    for i in range(count):
        username = f"user{i+1}"
        existing = crud.get_user_by_username(username, db=db)
        if existing is None:
            users.append(crud.create_user(username, "changeme", db=db))
        else:
            users.append(existing)
    return users


def random_plan_payload(rng: random.Random) -> PlanCreate:
    title, description = rng.choice(PLAN_TEMPLATES)
    return PlanCreate(
        title=title,
        length=rng.choice([14, 21, 28, 30, 42, 56]),
        coach=rng.choice(COACHES),
        description=description,
    )


def random_workout_payload(rng: random.Random, plan_id: int, index: int) -> WorkoutCreate:
    kind = rng.choice(WORKOUT_TYPES)
    return WorkoutCreate(
        plan_id=plan_id,
        name=f"{kind.title()} day {index + 1}",
        length=rng.choice([20, 30, 45, 60]),
        type=kind,
        frequency=rng.randint(1, 4),
    )


def random_exercise_payload(rng: random.Random, workout_id: int) -> ExerciseCreate:
    return ExerciseCreate(
        workout_id=workout_id,
        name=rng.choice(EXERCISES),
        sets=rng.randint(2, 5),
        reps=rng.randint(5, 15),
        rest_time=rng.choice([0, 30, 60, 90, 120]),
        tips=None,
    )


def seed_dataset(
    *,
    users: int = 3,
    plans_per_user: int = 2,
    workouts_per_plan: int = 3,
    exercises_per_workout: int = 4,
    admin_username: str = "admin",
    admin_password: str = "changeme",
    rng_seed: int = DEFAULT_RNG_SEED,
    reset: bool = False,
    db: Optional[Session] = None,
) -> dict:
    """
    API for testing and scripts

    Creates:
      - 1 admin
      - N users
      - plans per user, workouts per plan, exercises per workout

    Returns a dict summary.

    If `db` is provided, use it (so tests seed into their fixture DB).
    Otherwise create tables and use a local SessionLocal.
    """
    owns = db is None
    if owns:
        init_db()
    db = db or SessionLocal()

    try:
        if reset:
            wipe_data(db)

        rng = random.Random(rng_seed)

        admin = ensure_admin(db, admin_username, admin_password)
        user_rows = create_users(db, users)

        total_plans = 0
        total_workouts = 0
        total_exercises = 0

        for u in user_rows:
            for _ in range(plans_per_user):
                plan = crud.create_plan(random_plan_payload(rng), user_id=u.id, db=db)
                total_plans += 1
                for w_index in range(workouts_per_plan):
                    # owner-scoped writes, same path the API takes
                    w = crud.create_workout(random_workout_payload(rng, plan.id, w_index), owner_id=u.id, db=db)
                    total_workouts += 1
                    for _ in range(exercises_per_workout):
                        crud.create_exercise(random_exercise_payload(rng, w.id), owner_id=u.id, db=db)
                        total_exercises += 1

        logger.info("Seeded %s users, %s plans", len(user_rows), total_plans)
        return {
            "admin_id": admin.id,
            "users": len(user_rows),
            "plans": total_plans,
            "workouts": total_workouts,
            "exercises": total_exercises,
        }

    finally:
        if owns:
            db.close()


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entrypoint: python -m fitcoach.seed [options]
    """
    parser = argparse.ArgumentParser(description="Seed the FitCoach development database.")
    parser.add_argument("--users", type=int, default=3, help="Number of regular users to create.")
    parser.add_argument("--plans", type=int, default=2, help="Plans per user.")
    parser.add_argument("--workouts", type=int, default=3, help="Workouts per plan.")
    parser.add_argument("--exercises", type=int, default=4, help="Exercises per workout.")
    parser.add_argument("--admin-username", type=str, default="admin", help="Admin username.")
    parser.add_argument("--admin-password", type=str, default="changeme", help="Admin password.")
    parser.add_argument("--rng-seed", type=int, default=DEFAULT_RNG_SEED, help="Random seed.")
    parser.add_argument("--reset", action="store_true", help="Delete existing rows before seeding.")

    args = parser.parse_args(argv)

    if not args.admin_password:
        raise SystemExit("--admin-password must not be empty")

    logging.basicConfig(level=logging.INFO)
    summary = seed_dataset(
        users=max(0, args.users),
        plans_per_user=max(0, args.plans),
        workouts_per_plan=max(0, args.workouts),
        exercises_per_workout=max(0, args.exercises),
        admin_username=args.admin_username,
        admin_password=args.admin_password,
        rng_seed=args.rng_seed,
        reset=args.reset,
        # CLI path uses its own SessionLocal (db=None)
    )
    print(
        f"Seed complete: admin_id={summary['admin_id']}, users={summary['users']}, "
        f"plans={summary['plans']}, workouts={summary['workouts']}, exercises={summary['exercises']}"
    )


if __name__ == "__main__":
    main()

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import IntegrityError

from fitcoach.db import Base
from fitcoach import models

def make_memory_session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    return SessionLocal()

def test_insert_plan_workout_exercise_chain():
    db = make_memory_session()

    u = models.User(username="ana", password_hash="x")
    db.add(u)
    db.flush()  # gives u.id
    assert u.role == models.UserRole.user

    p = models.Plan(title="5K Plan", length=30, user_id=u.id)
    db.add(p)
    db.flush()

    w = models.Workout(plan_id=p.id, name="Intervals", length=45, frequency=2)
    db.add(w)
    db.flush()

    db.add(models.Exercise(workout_id=w.id, name="Strides", sets=4, reps=1, rest_time=0))
    db.commit()

    loaded = db.get(models.Plan, p.id)
    assert loaded.owner.username == "ana"
    assert len(loaded.workouts) == 1
    assert loaded.workouts[0].exercises[0].rest_time == 0

    db.close()

def test_duplicate_username_raises_integrity_error():
    db = make_memory_session()

    db.add(models.User(username="ana", password_hash="x"))
    db.commit()
    db.add(models.User(username="ana", password_hash="y"))

    with pytest.raises(IntegrityError):
        db.commit()

    db.close()

def test_exercise_with_null_sets_raises_integrity_error():
    db = make_memory_session()

    bad = models.Exercise(
        workout_id=1,
        name="Squat",
        sets=None,              # NOT NULL -> should fail on commit
        reps=5,
        rest_time=60,
    )
    db.add(bad)

    with pytest.raises(IntegrityError):
        db.commit()

    db.close()

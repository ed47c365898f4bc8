import pytest
from pydantic import ValidationError

from fitcoach.schemas import MAX_INT, PlanCreate, WorkoutCreate, ExerciseCreate, Register, Login

def test_exercise_accepts_rest_time_key_from_frontend():
    ex = ExerciseCreate(workout_id=1, name="Squat", sets=3, reps=10, restTime=60)
    assert ex.rest_time == 60
    assert ex.tips is None

def test_exercise_rest_time_zero_is_allowed():
    ex = ExerciseCreate(workout_id=1, name="Plank", sets=3, reps=1, rest_time=0)
    assert ex.rest_time == 0

@pytest.mark.parametrize("field, value", [("sets", 0), ("reps", 0), ("restTime", -1)])
def test_exercise_numeric_bounds(field, value):
    data = {"workout_id": 1, "name": "Squat", "sets": 3, "reps": 10, "restTime": 60}
    data[field] = value
    with pytest.raises(ValidationError) as exc:
        ExerciseCreate(**data)
    assert exc.value.errors()[0]["type"] in ("greater_than", "greater_than_equal")

def test_plan_length_must_be_positive():
    with pytest.raises(ValidationError):
        PlanCreate(title="5K Plan", length=0)

def test_plan_optional_fields_default_to_none():
    p = PlanCreate(title="5K Plan", length=30)
    assert p.coach is None and p.description is None

def test_workout_requires_name_and_frequency():
    with pytest.raises(ValidationError) as exc:
        WorkoutCreate(plan_id=1, length=30)
    missing = {e["loc"][0] for e in exc.value.errors() if e["type"] == "missing"}
    assert missing == {"name", "frequency"}

def test_register_strips_username_and_rejects_blank():
    assert Register(username="  ana ", password="pw").username == "ana"
    with pytest.raises(ValidationError):
        Register(username="   ", password="pw")

def test_login_strips_username_like_register():
    assert Login(username="  ana ", password="pw").username == "ana"
    assert Register(username="  ana ", password="pw").username == "ana"
    with pytest.raises(ValidationError):
        Login(username="   ", password="pw")

def test_numbers_are_capped_at_int32():
    with pytest.raises(ValidationError) as exc:
        PlanCreate(title="x", length=MAX_INT + 1)
    assert exc.value.errors()[0]["type"] == "less_than_equal"
    assert PlanCreate(title="x", length=MAX_INT).length == MAX_INT

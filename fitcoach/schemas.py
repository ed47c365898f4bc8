from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator

# Input schemas, validated at the request boundary.
# gt/ge = greater than/greater than or equal
# le=MAX_INT keeps numbers inside a 32-bit INTEGER column, ids start at 1

MAX_INT = 2**31 - 1


def _clean_username(v: str) -> str:
    value = v.strip()
    if not value:
        raise ValueError("Username is required.")
    return value

class Register(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _clean_username(v)

class Login(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _clean_username(v)

class RenewRequest(BaseModel):
    token: str = Field(..., min_length=1)


class PlanCreate(BaseModel):
    """Schema for a new or replaced training plan.

    -'title': required
    -'length': plan length in days, must be positive
    -'coach' / 'description': optional free text
    """
    title: str = Field(..., min_length=1, max_length=200)
    length: int = Field(..., gt=0, le=MAX_INT, description="Plan length in days")
    coach: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=2000)

# PUT replaces every editable field, owner is never part of the payload
PlanUpdate = PlanCreate


class WorkoutUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    length: int = Field(..., gt=0, le=MAX_INT, description="Workout length in minutes")
    type: str | None = Field(None, max_length=50)
    frequency: int = Field(..., gt=0, le=MAX_INT, description="Sessions per week")

class WorkoutCreate(WorkoutUpdate):
    plan_id: int = Field(..., ge=1, le=MAX_INT, description="Parent plan")


class ExerciseUpdate(BaseModel):
    """Schema for exercise edits.

    Accepts 'restTime' (what the front end sends) or 'rest_time'.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    sets: int = Field(..., gt=0, le=MAX_INT)
    reps: int = Field(..., gt=0, le=MAX_INT)
    rest_time: int = Field(..., ge=0, le=MAX_INT, validation_alias=AliasChoices("restTime", "rest_time"), description="Rest between sets in seconds")
    tips: str | None = Field(None, max_length=2000)

class ExerciseCreate(ExerciseUpdate):
    workout_id: int = Field(..., ge=1, le=MAX_INT, description="Parent workout")

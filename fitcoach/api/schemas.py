from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# Response shapes

class TokenResponse(BaseModel):
    message: str
    token: str

class PlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    length: int
    coach: Optional[str]
    description: Optional[str]
    user_id: int

class WorkoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plan_id: int
    name: str
    length: int
    type: Optional[str]
    frequency: int

class ExerciseResponse(BaseModel):
    """rest_time goes out as 'restTime', the key the front end reads."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_id: int
    name: str
    sets: int
    reps: int
    rest_time: int = Field(serialization_alias="restTime")
    tips: Optional[str]

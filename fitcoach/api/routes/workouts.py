from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from fitcoach.api.deps import ResourceId, get_db
from fitcoach.api.schemas import WorkoutResponse, ExerciseResponse
from fitcoach.api.authz import Identity, ResourceKind, authenticated, get_current_user, authorize_resource
from fitcoach.schemas import WorkoutCreate, WorkoutUpdate
from fitcoach import crud

router = APIRouter()

@router.get("", response_model=list[WorkoutResponse], dependencies=[Depends(authenticated)])
def list_workouts(db: Session = Depends(get_db)):
    return crud.list_workouts(db=db)

@router.post("", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(authenticated)])
def create_workout(payload: WorkoutCreate, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)):
    """
    Add a workout to a plan the caller owns (admins may use any plan).
    """
    scope = authorize_resource(db, current_user, ResourceKind.plan, payload.plan_id)
    return crud.create_workout(payload, owner_id=scope, db=db)

@router.get("/{workout_id}", response_model=WorkoutResponse, dependencies=[Depends(authenticated)])
def get_workout(workout_id: ResourceId, db: Session = Depends(get_db)):
    return crud.get_workout(workout_id, db=db)

@router.get("/{workout_id}/exercises", response_model=list[ExerciseResponse], dependencies=[Depends(authenticated)])
def list_workout_exercises(workout_id: ResourceId, db: Session = Depends(get_db)):
    return crud.list_exercises(workout_id=workout_id, db=db)

@router.put("/{workout_id}", response_class=PlainTextResponse, dependencies=[Depends(authenticated)])
def update_workout(workout_id: ResourceId, payload: WorkoutUpdate, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)) -> str:
    scope = authorize_resource(db, current_user, ResourceKind.workout, workout_id)
    crud.update_workout(workout_id, payload, owner_id=scope, db=db)
    return "Workout updated successfully"

@router.delete("/{workout_id}", response_class=PlainTextResponse, dependencies=[Depends(authenticated)])
def delete_workout(workout_id: ResourceId, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)) -> str:
    scope = authorize_resource(db, current_user, ResourceKind.workout, workout_id)
    crud.delete_workout(workout_id, owner_id=scope, db=db)
    return "Workout deleted successfully"

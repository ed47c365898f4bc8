from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from fitcoach.api.deps import ResourceId, get_db
from fitcoach.api.schemas import ExerciseResponse
from fitcoach.api.authz import Identity, ResourceKind, authenticated, get_current_user, authorize_resource
from fitcoach.schemas import ExerciseCreate, ExerciseUpdate
from fitcoach import crud

router = APIRouter()

@router.get("", response_model=list[ExerciseResponse], dependencies=[Depends(authenticated)])
def list_exercises(db: Session = Depends(get_db)):
    return crud.list_exercises(db=db)

@router.post("", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(authenticated)])
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)):
    """
    Add an exercise to a workout, caller must own the workout's plan or be admin.
    """
    scope = authorize_resource(db, current_user, ResourceKind.workout, payload.workout_id)
    return crud.create_exercise(payload, owner_id=scope, db=db)

@router.get("/{exercise_id}", response_model=ExerciseResponse, dependencies=[Depends(authenticated)])
def get_exercise(exercise_id: ResourceId, db: Session = Depends(get_db)):
    return crud.get_exercise(exercise_id, db=db)

@router.put("/{exercise_id}", response_class=PlainTextResponse, dependencies=[Depends(authenticated)])
def update_exercise(exercise_id: ResourceId, payload: ExerciseUpdate, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)) -> str:
    scope = authorize_resource(db, current_user, ResourceKind.exercise, exercise_id)
    crud.update_exercise(exercise_id, payload, owner_id=scope, db=db)
    return "Exercise updated successfully"

@router.delete("/{exercise_id}", response_class=PlainTextResponse, dependencies=[Depends(authenticated)])
def delete_exercise(exercise_id: ResourceId, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)) -> str:
    scope = authorize_resource(db, current_user, ResourceKind.exercise, exercise_id)
    crud.delete_exercise(exercise_id, owner_id=scope, db=db)
    return "Exercise deleted successfully"

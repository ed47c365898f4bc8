from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from fitcoach.api.deps import ResourceId, get_db
from fitcoach.api.schemas import PlanResponse, WorkoutResponse
from fitcoach.api.authz import Identity, ResourceKind, authenticated, get_current_user, authorize_resource
from fitcoach.schemas import PlanCreate, PlanUpdate
from fitcoach import crud

router = APIRouter()

@router.get("", response_model=list[PlanResponse], dependencies=[Depends(authenticated)])
def list_plans(db: Session = Depends(get_db)):
    return crud.list_plans(db=db)

@router.get("/{plan_id}", response_model=PlanResponse, dependencies=[Depends(authenticated)])
def get_plan(plan_id: ResourceId, db: Session = Depends(get_db)):
    return crud.get_plan(plan_id, db=db)

@router.get("/{plan_id}/workouts", response_model=list[WorkoutResponse], dependencies=[Depends(authenticated)])
def list_plan_workouts(plan_id: ResourceId, db: Session = Depends(get_db)):
    """
    Workouts belonging to one plan, 404 if the plan doesn't exist.
    """
    return crud.list_workouts(plan_id=plan_id, db=db)

@router.post("", response_model=PlanResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(authenticated)])
def create_plan(payload: PlanCreate, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)):
    """
    Create a plan owned by the caller.
    """
    return crud.create_plan(payload, user_id=current_user.id, db=db)

@router.put("/{plan_id}", response_class=PlainTextResponse, dependencies=[Depends(authenticated)])
def update_plan(plan_id: ResourceId, payload: PlanUpdate, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)) -> str:
    scope = authorize_resource(db, current_user, ResourceKind.plan, plan_id)
    crud.update_plan(plan_id, payload, owner_id=scope, db=db)
    return "Plan updated successfully"

@router.delete("/{plan_id}", response_class=PlainTextResponse, dependencies=[Depends(authenticated)])
def delete_plan(plan_id: ResourceId, db: Session = Depends(get_db), current_user: Identity = Depends(get_current_user)) -> str:
    """
    Deletes the plan along with its workouts and exercises.
    """
    scope = authorize_resource(db, current_user, ResourceKind.plan, plan_id)
    crud.delete_plan(plan_id, owner_id=scope, db=db)
    return "Plan deleted successfully"

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional
from fastapi import Depends, Header
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from fitcoach.auth import tokens
from fitcoach.errors import Unauthenticated, InvalidToken, Forbidden, NotFound
from fitcoach.models import UserRole, Plan, Workout, Exercise

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """Caller identity decoded from a verified token."""
    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value


class ResourceKind(str, enum.Enum):
    plan = "plan"
    workout = "workout"
    exercise = "exercise"


def extract_bearer_token(auth_header: str | None) -> str:
    """
    Pull JWT out of Authorization header: 'Bearer <token>'
    - tolerant of extra spaces
    - tolerant of a doubled scheme, "Bearer Bearer <token>"
    - anything else with more parts is malformed
    """
    if auth_header is None or not auth_header.strip():
        raise Unauthenticated()
    parts = auth_header.split()
    if len(parts) < 2:
        raise Unauthenticated("Invalid authorization header format.")
    if parts[0].lower() != "bearer":
        raise Unauthenticated("Authorization scheme must be Bearer.")
    if len(parts) == 3 and parts[1].lower() == "bearer":
        parts = parts[1:]
    if len(parts) != 2:
        raise Unauthenticated("Invalid authorization header format.")
    return parts[1]


def get_current_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> Identity:
    token = extract_bearer_token(authorization)
    try:
        claims = tokens.verify(token)
    except InvalidToken:
        logger.warning("Rejected bearer token")
        raise

    try:
        return Identity(
            id=int(claims["id"]),  # accept "1" or 1
            username=str(claims.get("username", "")),
            role=str(claims.get("role", "")),
        )
    except (KeyError, TypeError, ValueError):
        raise InvalidToken("Invalid token claims.")


def require_roles(*allowed: UserRole | str) -> Callable[[Identity], Identity]:
    """
    Ensure current user has one of the allowed roles.
    If none provided, defaults to {"user", "admin"}.
    """
    allowed_values: set[str] = set()
    if not allowed:
        allowed_values.update({"user", "admin"})
    else:
        for item in allowed:
            allowed_values.add(item.value if isinstance(item, UserRole) else str(item))

    def _dep(user: Identity = Depends(get_current_user)) -> Identity:
        if user.role not in allowed_values:
            raise Forbidden("Access denied. You do not have the required permissions.")
        return user

    return _dep


# any signed-in user or admin
authenticated = require_roles(UserRole.user, UserRole.admin)


def resolve_owner(db: Session, kind: ResourceKind, resource_id: int) -> int:
    """
    Walk exercise -> workout -> plan and return the plan's owning user id.
    One lookup per hop, stops with NotFound at the first missing link.
    """
    if kind == ResourceKind.exercise:
        workout_id = db.execute(
            select(Exercise.workout_id).where(Exercise.id == resource_id)
        ).scalar_one_or_none()
        if workout_id is None:
            raise NotFound("Exercise not found")
        kind, resource_id = ResourceKind.workout, workout_id

    if kind == ResourceKind.workout:
        plan_id = db.execute(
            select(Workout.plan_id).where(Workout.id == resource_id)
        ).scalar_one_or_none()
        if plan_id is None:
            raise NotFound("Workout not found")
        kind, resource_id = ResourceKind.plan, plan_id

    owner_id = db.execute(
        select(Plan.user_id).where(Plan.id == resource_id)
    ).scalar_one_or_none()
    if owner_id is None:
        raise NotFound("Plan not found")
    return owner_id


def authorize(identity: Identity, owner_id: int) -> None:
    """Admins pass, otherwise the caller must own the plan."""
    if identity.is_admin:
        return
    if identity.role == UserRole.user.value and identity.id == owner_id:
        return
    logger.warning("Denied user id=%s on resource owned by id=%s", identity.id, owner_id)
    raise Forbidden("You do not own this resource.")


def owner_scope(identity: Identity) -> Optional[int]:
    """
    Owner filter for the conditional write that follows authorize():
    None for admins (unscoped), the caller's id otherwise.
    """
    return None if identity.is_admin else identity.id


def authorize_resource(db: Session, identity: Identity, kind: ResourceKind, resource_id: int) -> Optional[int]:
    """
    resolve_owner + authorize, returns the owner scope for the write.
    """
    owner_id = resolve_owner(db, kind, resource_id)
    authorize(identity, owner_id)
    return owner_scope(identity)

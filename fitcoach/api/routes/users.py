import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fitcoach.api.deps import get_db
from fitcoach.api.schemas import TokenResponse
from fitcoach.schemas import Register, Login, RenewRequest
from fitcoach.auth import verify_password, tokens
from fitcoach.errors import InvalidCredentials
from fitcoach import crud

logger = logging.getLogger(__name__)

router = APIRouter()

def _claims(user) -> dict:
    return {"id": user.id, "username": user.username, "role": user.role.value}

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(payload: Register, db: Session = Depends(get_db)) -> dict:
    """
    Create a 'user' role account and hand back a token straight away.
    """
    user = crud.create_user(payload.username, payload.password, db=db)
    logger.info("Registered user id=%s", user.id)
    return {"message": "User registered successfully.", "token": tokens.issue(_claims(user))}

@router.post("/login", response_model=TokenResponse)
def login(payload: Login, db: Session = Depends(get_db)) -> dict:
    user = crud.get_user_by_username(payload.username, db=db)
    # same answer for unknown user and wrong password
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise InvalidCredentials()
    logger.info("User id=%s logged in", user.id)
    return {"message": "Login successful.", "token": tokens.issue(_claims(user))}

@router.post("/renew", response_model=TokenResponse)
def renew(payload: RenewRequest) -> dict:
    """
    Swap a still-valid token for one with a fresh expiry.
    """
    return {"message": "Token renewed successfully.", "token": tokens.renew(payload.token)}

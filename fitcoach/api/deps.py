from typing import Annotated, Iterator
from fastapi import Path
from sqlalchemy.orm import Session
from fitcoach.db import SessionLocal
from fitcoach.schemas import MAX_INT


# path ids are bounded like the INTEGER column they look up
ResourceId = Annotated[int, Path(ge=1, le=MAX_INT)]


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency, yields a database session as well as ensures that 
    the database is closed after request ends.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

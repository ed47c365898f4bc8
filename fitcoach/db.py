from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from .config import database_url

# sqlite:/// the triple slash means relative to current wkdir
DATABASE_URL = database_url()

connect_args = {}
if str(DATABASE_URL).startswith("sqlite"):
    connect_args = {"check_same_thread": False}

# one pooled engine per process, connections are checked out per session
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args
)

#Defining Base class for models to inherit
class Base(DeclarativeBase):
    """Base Class for ORM models"""
    pass

#Builds a factory which creates new DB sessions on Demand
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

# Calls SQLAlchemy to make tables declared by models
def init_db() -> None:
    """Create all tables based on Base metadata"""
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=engine)

# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fitcoach.db import Base  # Declarative Base
import fitcoach.models as _models  # noqa: F401  ensure models are registered with Base
from fitcoach.api.main import create_app
from fitcoach.api.deps import get_db


@pytest.fixture()
def db_session(tmp_path):
    # file-based sqlite so multiple connections see the same data
    db_file = tmp_path / "test_fitcoach.db"
    engine = create_engine(f"sqlite+pysqlite:///{db_file}")
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def client(db_session) -> TestClient:
    """
    Create an app per test and wire it to the test DB session.
    We override get_db to yield the test session.
    """
    app = create_app()

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

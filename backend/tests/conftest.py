import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["SCHEDULE_TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.core.security import create_identity_token
from app.db.base import Base
from app.main import app
from app.models.user import User, UserRole
from app.repositories import Repositories


@pytest.fixture()
def session_factory():
    # One shared in-memory connection so the API and the test see the same rows.
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repos(db):
    return Repositories.for_session(db)


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def bearer(external_id, **claims):
    token = create_identity_token({"sub": external_id, **claims})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(repos):
    def _make_user(external_id, role=UserRole.STUDENT, email=None):
        user = repos.users.add(
            User(
                external_id=external_id,
                email=email or f"{external_id}@university.edu",
                first_name=external_id.title(),
                last_name="Tester",
                role=role,
            )
        )
        return user, bearer(external_id)

    return _make_user


@pytest.fixture()
def admin(make_user):
    return make_user("admin", role=UserRole.ADMIN)


@pytest.fixture()
def student(make_user):
    return make_user("student")


@pytest.fixture()
def auth_headers():
    return bearer

from __future__ import annotations

import base64
import os
import sys
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# The application reads its settings at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "0"
os.environ["AUTH_JWT_SECRET"] = base64.urlsafe_b64encode(os.urandom(32)).decode()
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "60"

from backend.app import models  # noqa: E402
from backend.app.database import Base, get_db  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.services import CompanyService, SqlAlchemyRecordStore, UserService  # noqa: E402

OWNER_EMAIL = "titolare@example.com"
OWNER_PASSWORD = "Segreta123"

SQLALCHEMY_DATABASE_URL = "sqlite://"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="session", autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _default_net_income_formula(monkeypatch) -> None:
    monkeypatch.delenv("NET_INCOME_FORMULA", raising=False)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def store(db_session: Session) -> SqlAlchemyRecordStore:
    return SqlAlchemyRecordStore(db_session)


@pytest.fixture
def owner(db_session: Session) -> models.User:
    return UserService.register(db_session, OWNER_EMAIL, OWNER_PASSWORD)


@pytest.fixture
def make_company(store: SqlAlchemyRecordStore, owner: models.User) -> Callable[..., models.Company]:
    def factory(name: str = "Acme Srl", user_id: str | None = None, **fields) -> models.Company:
        return CompanyService.create_company(store, user_id or owner.id, name, **fields)

    return factory


def _login(test_client: TestClient, email: str, password: str) -> str:
    response = test_client.post("/auth/token", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture
def anonymous_client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            db_session.expire_all()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def client(anonymous_client: TestClient, owner: models.User) -> TestClient:
    token = _login(anonymous_client, OWNER_EMAIL, OWNER_PASSWORD)
    anonymous_client.headers.update({"Authorization": f"Bearer {token}"})
    return anonymous_client


@pytest.fixture
def other_user_headers(anonymous_client: TestClient, db_session: Session) -> dict[str, str]:
    UserService.register(db_session, "altro@example.com", "Altra1234")
    token = _login(anonymous_client, "altro@example.com", "Altra1234")
    return {"Authorization": f"Bearer {token}"}

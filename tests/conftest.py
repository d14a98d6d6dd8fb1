"""Shared fixtures: in-memory database, services and an authenticated client."""

import os

# Must be set before tracker_service reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ADMIN_SECRET", "test-admin-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tracker_service.core.database import Base, get_db
from tracker_service import models  # noqa: F401
from tracker_service.main import app
from tracker_service.services.entity_store import EntityKind, EntityStore
from tracker_service.services.reports import ReportService
from tracker_service.services.resolver import ReferenceResolver
from tracker_service.services.task_repository import TaskRepository
from tracker_service.utils.security import create_access_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return EntityStore(db)


@pytest.fixture
def resolver(store):
    return ReferenceResolver(store)


@pytest.fixture
def repository(db):
    return TaskRepository(db)


@pytest.fixture
def reports(repository):
    return ReportService(repository)


@pytest.fixture
def seed(store):
    """Two users, a project, a team and a tag."""
    alice = store.create(EntityKind.USER, {
        "name": "Alice", "email": "alice@example.com", "hashed_password": "x",
    })
    bob = store.create(EntityKind.USER, {
        "name": "Bob", "email": "bob@example.com", "hashed_password": "x",
    })
    project = store.create(EntityKind.PROJECT, {"name": "Apollo"})
    team = store.create(EntityKind.TEAM, {"name": "Platform"})
    tag = store.create(EntityKind.TAG, {"name": "urgent"})
    return {"alice": alice, "bob": bob, "project": project, "team": team, "tag": tag}


@pytest.fixture
def client(session_factory):
    """TestClient with get_db overridden to the test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token({"sub": "0" * 32, "email": "tester@example.com"})
    return {"Authorization": f"Bearer {token}"}

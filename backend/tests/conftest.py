"""
Point the app at one shared in-memory SQLite database before anything from
``liftlog`` is imported, build the schema from the models and seed a small
catalog. Test modules keep their own module-level ``TestClient(app)``.
"""
import os
import uuid

os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("APP_TIMEZONE", "UTC")

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from liftlog import models  # noqa: F401  (registers every table on Base)
from liftlog.db import Base, get_db, make_engine
from liftlog.main import app
from liftlog.models import Category, Exercise
from liftlog.security import create_access_token

engine = make_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

CATALOG = {
    "chest": ("Chest", ["Bench Press", "Incline Dumbbell Press"]),
    "back": ("Back", ["Deadlift", "Barbell Row"]),
    "legs": ("Legs", ["Squat", "Leg Press"]),
    "cardio": ("Cardio", ["Treadmill"]),
}


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def _seed_catalog() -> None:
    with TestingSessionLocal() as db:
        for idx, (slug, (name, exercises)) in enumerate(CATALOG.items(), start=1):
            cat = Category(name=name, slug=slug, sort_order=idx)
            cat.exercises = [Exercise(name=ex) for ex in exercises]
            db.add(cat)
        db.commit()


Base.metadata.create_all(bind=engine)
_seed_catalog()
app.dependency_overrides[get_db] = override_get_db


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_id() -> str:
    # every test gets a fresh identity, so rows never collide across tests
    return f"user-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def headers(user_id) -> dict:
    return auth_headers(user_id)


@pytest.fixture(scope="session")
def exercise_ids() -> dict:
    """Seeded catalog exercise name -> id."""
    with TestingSessionLocal() as session:
        return {ex.name: ex.id for ex in session.query(Exercise).filter(Exercise.is_custom.is_(False))}

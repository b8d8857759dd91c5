import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# До импорта приложения: без сидинга и с БД в памяти
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from student_management.infrastructure.db import get_db
from student_management.infrastructure.models import Base, UserORM
from student_management.infrastructure.repositories import to_domain
from student_management.infrastructure.security import PasswordHasher, issue_access_token
from student_management.main import app

# Одно соединение на все потоки, иначе у каждого потока своя пустая БД в памяти
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    """Сессия к той же тестовой БД, что и у приложения"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def database():
    """Чистые таблицы для каждого теста"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db_session):
    """Пользователь с паролем password123"""
    row = UserORM(
        email="teacher@example.com",
        name="Test Teacher",
        password_hash=PasswordHasher().hash("password123"),
        role="user",
    )
    db_session.add(row); db_session.commit(); db_session.refresh(row)
    return row


@pytest.fixture
def auth_headers(user):
    token = issue_access_token(to_domain(user))
    return {"Authorization": f"Bearer {token}"}

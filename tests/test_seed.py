from student_management.config import settings
from student_management.infrastructure.models import Enrollment, UserORM
from student_management.infrastructure.seed import seed_database
from student_management.infrastructure.security import PasswordHasher


def test_seed_empty_database(db_session):
    """Сидинг пустой БД: админ и демо-данные"""
    summary = seed_database(db_session)
    assert summary == {"users": 1, "students": 3, "courses": 4, "enrollments": 5}

    admin = db_session.query(UserORM).filter(UserORM.email == settings.ADMIN_EMAIL).one()
    assert admin.role == "admin"
    assert PasswordHasher().verify(settings.ADMIN_PASSWORD, admin.password_hash)

    completed = db_session.query(Enrollment).filter(Enrollment.status == "completed").count()
    assert completed == 1


def test_seed_is_idempotent(db_session):
    first = seed_database(db_session)
    second = seed_database(db_session)
    assert first == second


def test_seed_keeps_existing_rows(client, auth_headers, db_session):
    """Непустые таблицы не трогаем"""
    client.post("/api/courses", json={"code": "BIO1", "title": "Biology", "credits": 2, "semester": 1},
                headers=auth_headers)

    summary = seed_database(db_session)
    assert summary["courses"] == 1
    assert summary["students"] == 3
    # teacher@example.com + админ
    assert summary["users"] == 2


def test_seeded_admin_can_log_in(client, db_session):
    seed_database(db_session)
    response = client.post(
        "/api/auth/login",
        json={"email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD},
    )
    assert response.status_code == 200

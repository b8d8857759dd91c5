from unittest.mock import patch

from student_management.domain.results import ErrorKind, Result
from student_management.infrastructure.models import Course

CS101 = {"code": "CS101", "title": "Intro", "credits": 3, "semester": 1}


def test_create_course(client, auth_headers):
    """Создание курса"""
    response = client.post("/api/courses", json=CS101, headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "CS101"
    assert data["title"] == "Intro"
    assert data["description"] is None
    assert data["credits"] == 3
    assert data["semester"] == 1
    assert isinstance(data["id"], int)


def test_created_course_listed_first(client, auth_headers):
    client.post("/api/courses", json=CS101, headers=auth_headers)
    created = client.post(
        "/api/courses",
        json={"code": "MATH201", "title": "Calculus I", "credits": 4, "semester": 1,
              "description": "Limits"},
        headers=auth_headers,
    ).json()

    courses = client.get("/api/courses", headers=auth_headers).json()
    assert [c["code"] for c in courses] == ["MATH201", "CS101"]
    assert courses[0]["id"] == created["id"]


def test_create_course_duplicate_code(client, auth_headers):
    """Повторный код курса: 201, затем 400"""
    assert client.post("/api/courses", json=CS101, headers=auth_headers).status_code == 201

    response = client.post("/api/courses", json={**CS101, "title": "Other"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Course with this code already exists"


def test_create_course_invalid_credits(client, auth_headers):
    response = client.post("/api/courses", json={**CS101, "credits": "three"}, headers=auth_headers)
    assert response.status_code == 422


def test_create_course_store_failure(client, auth_headers):
    """Неизвестная ошибка хранилища превращается в 500"""
    failure = Result.failure(ErrorKind.UNKNOWN, "disk I/O error")
    with patch("student_management.interfaces.http.routers.courses.CourseRepository.create",
               return_value=failure):
        response = client.post("/api/courses", json=CS101, headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


def test_list_courses_store_failure(client, auth_headers):
    failure = Result.failure(ErrorKind.UNKNOWN, "connection lost")
    with patch("student_management.interfaces.http.routers.courses.CourseRepository.find_many",
               return_value=failure):
        response = client.get("/api/courses", headers=auth_headers)
    assert response.status_code == 500


def test_list_courses_never_reports_conflict(client, auth_headers):
    """Конфликт бывает только при вставке: в списке это 500"""
    failure = Result.failure(ErrorKind.CONFLICT, "unexpected")
    with patch("student_management.interfaces.http.routers.courses.CourseRepository.find_many",
               return_value=failure):
        response = client.get("/api/courses", headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


def test_courses_unauthorized(client, db_session):
    assert client.get("/api/courses").status_code == 401
    assert client.post("/api/courses", json=CS101).status_code == 401
    assert db_session.query(Course).count() == 0

from unittest.mock import patch

from fastapi.testclient import TestClient

from student_management.main import app


def test_dashboard_stats_empty(client, auth_headers):
    response = client.get("/api/dashboard/stats", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"studentCount": 0, "courseCount": 0, "enrollmentCount": 0}


def test_dashboard_stats_counts(client, auth_headers):
    """Счётчики отражают созданные записи"""
    student = client.post(
        "/api/students",
        json={"email": "john.doe@student.com", "firstName": "John", "lastName": "Doe"},
        headers=auth_headers,
    ).json()
    for code in ("CS101", "CS102"):
        client.post("/api/courses", json={"code": code, "title": code, "credits": 3, "semester": 1},
                    headers=auth_headers)
    courses = client.get("/api/courses", headers=auth_headers).json()
    client.post("/api/enrollments", json={"studentId": student["id"], "courseId": courses[0]["id"]},
                headers=auth_headers)

    response = client.get("/api/dashboard/stats", headers=auth_headers)
    assert response.json() == {"studentCount": 1, "courseCount": 2, "enrollmentCount": 1}


def test_dashboard_unauthorized(client):
    assert client.get("/api/dashboard/stats").status_code == 401


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_metrics_endpoint(client, auth_headers):
    """Тест endpoint метрик"""
    client.get("/api/students", headers=auth_headers)
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "http_requests_total" in response.text
    assert "db_queries_total" in response.text


def test_failed_request_is_counted(client, auth_headers):
    """Упавший запрос попадает в метрики со статусом 500"""
    # фикстура client уже подменила get_db
    client = TestClient(app, raise_server_exceptions=False)
    with patch("student_management.interfaces.http.routers.courses.CourseRepository.find_many",
               side_effect=RuntimeError("boom")):
        response = client.get("/api/courses", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}

    lines = client.get("/metrics").text.splitlines()
    assert any(
        line.startswith("http_requests_total{")
        and 'endpoint="/api/courses"' in line and 'status="500"' in line
        for line in lines
    )

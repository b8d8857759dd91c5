def test_full_flow(client, user):
    """Интеграционный тест: вход, создание сущностей, списки, дашборд"""

    # 1. Вход
    login = client.post("/api/auth/login", json={"email": "teacher@example.com", "password": "password123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}

    # 2. Студент
    student = client.post(
        "/api/students",
        json={"email": "john.doe@student.com", "firstName": "John", "lastName": "Doe", "major": "CS"},
        headers=headers,
    )
    assert student.status_code == 201
    assert client.get("/api/students", headers=headers).json()[0]["id"] == student.json()["id"]

    # 3. Курс
    course = client.post(
        "/api/courses",
        json={"code": "CS101", "title": "Intro", "credits": 3, "semester": 1},
        headers=headers,
    )
    assert course.status_code == 201
    assert client.get("/api/courses", headers=headers).json()[0]["code"] == "CS101"

    # 4. Запись на курс и повтор
    body = {"studentId": student.json()["id"], "courseId": course.json()["id"], "grade": "A"}
    enrollment = client.post("/api/enrollments", json=body, headers=headers)
    assert enrollment.status_code == 201
    assert client.post("/api/enrollments", json=body, headers=headers).status_code == 400
    assert client.get("/api/enrollments", headers=headers).json()[0]["id"] == enrollment.json()["id"]

    # 5. Дашборд
    stats = client.get("/api/dashboard/stats", headers=headers).json()
    assert stats == {"studentCount": 1, "courseCount": 1, "enrollmentCount": 1}

"""Модели состояния страниц клиента.

Каждая страница хранит своё состояние (форма, загруженный список, флаг
загрузки, адрес редиректа) в собственном объекте и общается с API через
переданный httpx.Client. Общего глобального состояния нет: токен лежит
в ClientSession, которую страницы получают явно.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)

SIGNIN_PATH = "/auth/signin"
DASHBOARD_PATH = "/dashboard"


@dataclass
class ClientSession:
    access_token: str | None = None

    @property
    def authenticated(self) -> bool:
        return bool(self.access_token)

    def headers(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}


def _error_message(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    return detail if isinstance(detail, str) else f"Request failed ({response.status_code})"


def _int_or_none(value: str) -> int | None:
    value = value.strip()
    return int(value) if value else None


@dataclass
class SignInPage:
    http: httpx.Client
    session: ClientSession
    email: str = ""
    password: str = ""
    error: str | None = None
    redirect_to: str | None = None

    def submit(self) -> bool:
        self.error = None
        response = self.http.post("/api/auth/login", json={"email": self.email, "password": self.password})
        if response.status_code != 200:
            self.error = "Invalid email or password"
            return False
        self.session.access_token = response.json()["accessToken"]
        self.password = ""
        self.redirect_to = DASHBOARD_PATH
        return True


class AuthenticatedPage(ABC):
    """Общее поведение страниц за логином: редирект и загрузка данных."""
    def __init__(self, http: httpx.Client, session: ClientSession):
        self.http = http
        self.session = session
        self.loading = True
        self.redirect_to: str | None = None

    def mount(self) -> None:
        if not self.session.authenticated:
            self.redirect_to = SIGNIN_PATH
            return
        try:
            self.load()
        except httpx.HTTPError as e:
            logger.warning("page_fetch_failed", page=type(self).__name__, error=str(e))
        finally:
            self.loading = False

    @abstractmethod
    def load(self) -> None:
        """Загрузить данные страницы."""


@dataclass
class DashboardStats:
    student_count: int = 0
    course_count: int = 0
    enrollment_count: int = 0


class DashboardPage(AuthenticatedPage):
    def __init__(self, http: httpx.Client, session: ClientSession):
        super().__init__(http, session)
        self.stats = DashboardStats()

    def load(self) -> None:
        response = self.http.get("/api/dashboard/stats", headers=self.session.headers())
        if response.status_code == 200:
            data = response.json()
            self.stats = DashboardStats(
                student_count=data["studentCount"],
                course_count=data["courseCount"],
                enrollment_count=data["enrollmentCount"],
            )


class ResourcePage(AuthenticatedPage):
    """Таблица сущностей плюс форма добавления.

    После успешного создания новая строка ставится в начало списка,
    форма сбрасывается к значениям по умолчанию и скрывается.
    """
    endpoint: str = ""
    form_defaults: dict[str, str] = {}

    def __init__(self, http: httpx.Client, session: ClientSession):
        super().__init__(http, session)
        self.items: list[dict[str, Any]] = []
        self.form: dict[str, str] = dict(self.form_defaults)
        self.show_form = False
        self.error: str | None = None

    def load(self) -> None:
        response = self.http.get(self.endpoint, headers=self.session.headers())
        if response.status_code == 200:
            self.items = response.json()

    def payload(self) -> dict[str, Any]:
        return {key: (value or None) for key, value in self.form.items()}

    def reset_form(self) -> None:
        self.form = dict(self.form_defaults)

    def submit(self) -> bool:
        self.error = None
        try:
            response = self.http.post(self.endpoint, json=self.payload(), headers=self.session.headers())
        except (httpx.HTTPError, ValueError) as e:
            self.error = str(e)
            logger.warning("page_submit_failed", page=type(self).__name__, error=self.error)
            return False
        if response.status_code != 201:
            self.error = _error_message(response)
            return False
        self.items = [response.json(), *self.items]
        self.reset_form()
        self.show_form = False
        return True


class StudentsPage(ResourcePage):
    endpoint = "/api/students"
    form_defaults = {
        "email": "",
        "firstName": "",
        "lastName": "",
        "phone": "",
        "address": "",
        "city": "",
        "zipCode": "",
        "dateOfBirth": "",
        "enrollmentYear": "",
        "major": "",
    }

    def payload(self) -> dict[str, Any]:
        data = super().payload()
        data["enrollmentYear"] = _int_or_none(self.form["enrollmentYear"])
        return data


class CoursesPage(ResourcePage):
    endpoint = "/api/courses"
    form_defaults = {
        "code": "",
        "title": "",
        "description": "",
        "credits": "3",
        "semester": "1",
    }

    def payload(self) -> dict[str, Any]:
        data = super().payload()
        data["credits"] = int(self.form["credits"])
        data["semester"] = int(self.form["semester"])
        return data


class EnrollmentsPage(ResourcePage):
    endpoint = "/api/enrollments"
    form_defaults = {
        "studentId": "",
        "courseId": "",
        "grade": "",
        "status": "active",
    }

    def payload(self) -> dict[str, Any]:
        data = super().payload()
        data["studentId"] = int(self.form["studentId"])
        data["courseId"] = int(self.form["courseId"])
        return data

from typing import Any, Callable, Generic, TypeVar

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .metrics import db_queries_total, store_errors_total
from .models import Course, Enrollment, Student, UserORM
from ..application.use_cases.authenticate_user import IUserRepository
from ..domain.entities import User
from ..domain.results import ErrorKind, Result

logger = structlog.get_logger(__name__)

M = TypeVar("M")
T = TypeVar("T")

# SQLSTATE: unique_violation / foreign_key_violation
_PG_CONFLICT = "23505"
_PG_FOREIGN_KEY = "23503"


def classify_integrity_error(exc: IntegrityError) -> ErrorKind:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == _PG_CONFLICT:
        return ErrorKind.CONFLICT
    if code == _PG_FOREIGN_KEY:
        return ErrorKind.NOT_FOUND
    message = str(orig).lower()
    if "unique" in message or "duplicate" in message:
        return ErrorKind.CONFLICT
    if "foreign key" in message:
        return ErrorKind.NOT_FOUND
    return ErrorKind.UNKNOWN


def to_domain(u: UserORM) -> User:
    return User(id=u.id, email=u.email, name=u.name, role=u.role)


class SqlRepository(Generic[M]):
    """Доступ к одной таблице: count / find_many / get / create.

    Исключения SQLAlchemy наружу не выходят: любая ошибка превращается
    в Result с одним из ErrorKind.
    """
    model: type
    entity: str

    def __init__(self, db: Session): self.db = db

    def _order_by(self) -> tuple:
        return (self.model.created_at.desc(), self.model.id.desc())

    def _run(self, operation: str, action: Callable[[], T]) -> Result[T]:
        db_queries_total.labels(entity=self.entity, operation=operation).inc()
        try:
            return Result.success(action())
        except IntegrityError as e:
            self.db.rollback()
            kind = classify_integrity_error(e)
            return self._failed(operation, kind, str(e.orig))
        except (SQLAlchemyError, OverflowError, ValueError) as e:
            # OverflowError/ValueError драйвер кидает мимо обёрток SQLAlchemy
            self.db.rollback()
            return self._failed(operation, ErrorKind.UNKNOWN, str(e))

    def _failed(self, operation: str, kind: ErrorKind, detail: str) -> Result:
        store_errors_total.labels(entity=self.entity, kind=kind.value).inc()
        logger.warning("store_error", entity=self.entity, operation=operation,
                       kind=kind.value, detail=detail)
        return Result.failure(kind, detail)

    def count(self) -> Result[int]:
        return self._run("count", lambda: self.db.scalar(select(func.count()).select_from(self.model)))

    def find_many(self) -> Result[list[M]]:
        stmt = select(self.model).order_by(*self._order_by())
        return self._run("find_many", lambda: list(self.db.scalars(stmt).all()))

    def get(self, row_id: int) -> Result[M]:
        result = self._run("get", lambda: self.db.get(self.model, row_id))
        if result.ok and result.value is None:
            return Result.failure(ErrorKind.NOT_FOUND, self.entity)
        return result

    def create(self, **fields: Any) -> Result[M]:
        def insert():
            row = self.model(**fields)
            self.db.add(row); self.db.commit(); self.db.refresh(row)
            return row
        return self._run("create", insert)


class StudentRepository(SqlRepository[Student]):
    model = Student
    entity = "student"


class CourseRepository(SqlRepository[Course]):
    model = Course
    entity = "course"


class EnrollmentRepository(SqlRepository[Enrollment]):
    model = Enrollment
    entity = "enrollment"

    def _order_by(self) -> tuple:
        return (Enrollment.enrollment_date.desc(), Enrollment.id.desc())

    def create(self, **fields: Any) -> Result[Enrollment]:
        # SQLite без PRAGMA foreign_keys пропустит висячие ссылки, проверяем явно
        for repo, key in ((StudentRepository(self.db), "student_id"),
                          (CourseRepository(self.db), "course_id")):
            found = repo.get(fields[key])
            if not found.ok:
                return Result(error=found.error)
        return super().create(**fields)


class UserRepository(SqlRepository[UserORM], IUserRepository):
    model = UserORM
    entity = "user"

    def _row_by_email(self, email: str) -> Result[UserORM | None]:
        stmt = select(UserORM).where(UserORM.email == email)
        return self._run("get_by_email", lambda: self.db.scalar(stmt))

    def get_by_email(self, email: str) -> Result[User | None]:
        found = self._row_by_email(email)
        if not found.ok:
            return found
        return Result.success(to_domain(found.value) if found.value else None)

    def find_credentials(self, email: str) -> Result[tuple[User, str] | None]:
        found = self._row_by_email(email)
        if not found.ok:
            return found
        row = found.value
        return Result.success((to_domain(row), row.password_hash) if row else None)

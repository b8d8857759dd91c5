"""Начальные данные: администратор и несколько демо-записей.

Каждый шаг выполняется только если соответствующая таблица пуста,
поэтому повторный запуск ничего не меняет.
"""
import logging

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import settings
from ..domain.results import StoreFailure
from .models import Base, Course, Enrollment, Student, UserORM
from .repositories import CourseRepository, EnrollmentRepository, StudentRepository, UserRepository
from .security import PasswordHasher

logger = structlog.get_logger(__name__)

SAMPLE_STUDENTS = [
    {"email": "john.doe@student.com", "first_name": "John", "last_name": "Doe",
     "phone": "+1234567890", "city": "New York", "major": "Computer Science", "enrollment_year": 2023},
    {"email": "jane.smith@student.com", "first_name": "Jane", "last_name": "Smith",
     "phone": "+1234567891", "city": "Boston", "major": "Mathematics", "enrollment_year": 2023},
    {"email": "mike.johnson@student.com", "first_name": "Mike", "last_name": "Johnson",
     "phone": "+1234567892", "city": "Chicago", "major": "Physics", "enrollment_year": 2022},
]

SAMPLE_COURSES = [
    {"code": "CS101", "title": "Introduction to Computer Science", "credits": 3, "semester": 1,
     "description": "Fundamentals of programming and algorithms"},
    {"code": "MATH201", "title": "Calculus I", "credits": 4, "semester": 1,
     "description": "Differential calculus and limits"},
    {"code": "PHYS101", "title": "Physics I: Mechanics", "credits": 4, "semester": 1,
     "description": "Classical mechanics and motion"},
    {"code": "CS102", "title": "Data Structures", "credits": 3, "semester": 2,
     "description": "Trees, graphs, and advanced data structures"},
]

# (индекс студента, индекс курса, статус, оценка)
SAMPLE_ENROLLMENTS = [
    (0, 0, "active", "A"),
    (0, 1, "active", "B+"),
    (1, 0, "active", "A-"),
    (1, 2, "active", "B"),
    (2, 1, "completed", "A"),
]


def _value(result):
    if not result.ok:
        raise StoreFailure(result.error)
    return result.value


def _is_empty(repo) -> bool:
    return _value(repo.count()) == 0


def seed_database(db: Session) -> dict[str, int]:
    users = UserRepository(db)
    if _value(users.get_by_email(settings.ADMIN_EMAIL)) is None:
        db.add(UserORM(
            email=settings.ADMIN_EMAIL,
            name=settings.ADMIN_NAME,
            password_hash=PasswordHasher().hash(settings.ADMIN_PASSWORD),
            role="admin",
        ))
        db.commit()
        logger.info("admin_created", email=settings.ADMIN_EMAIL)
    else:
        logger.info("admin_exists", email=settings.ADMIN_EMAIL)

    if _is_empty(StudentRepository(db)):
        db.add_all(Student(**fields) for fields in SAMPLE_STUDENTS)
        db.commit()
        logger.info("sample_students_created", count=len(SAMPLE_STUDENTS))

    if _is_empty(CourseRepository(db)):
        db.add_all(Course(**fields) for fields in SAMPLE_COURSES)
        db.commit()
        logger.info("sample_courses_created", count=len(SAMPLE_COURSES))

    if _is_empty(EnrollmentRepository(db)):
        students = db.scalars(select(Student).order_by(Student.id).limit(3)).all()
        courses = db.scalars(select(Course).order_by(Course.id).limit(4)).all()
        rows = [
            Enrollment(student_id=students[s].id, course_id=courses[c].id, status=st, grade=grade)
            for s, c, st, grade in SAMPLE_ENROLLMENTS
            if s < len(students) and c < len(courses)
        ]
        if rows:
            db.add_all(rows)
            db.commit()
            logger.info("sample_enrollments_created", count=len(rows))

    summary = {
        "users": _value(users.count()),
        "students": _value(StudentRepository(db).count()),
        "courses": _value(CourseRepository(db).count()),
        "enrollments": _value(EnrollmentRepository(db).count()),
    }
    logger.info("seed_complete", **summary)
    return summary


def main():
    from .db import SessionLocal, engine

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        ),
    )
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_database(db)
    except Exception:
        logger.exception("seed_failed")
        raise SystemExit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()

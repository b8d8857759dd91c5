# student_management/infrastructure/models.py
from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase): pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), default="user")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"UserORM(id={self.id!r}, email={self.email!r}, role={self.role!r})"


class StudentORM(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    enrollment_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    major: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    enrollments: Mapped[list["EnrollmentORM"]] = relationship(
        "EnrollmentORM",
        back_populates="student",
    )

    def __repr__(self) -> str:
        return f"StudentORM(id={self.id!r}, email={self.email!r})"


class CourseORM(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    enrollments: Mapped[list["EnrollmentORM"]] = relationship(
        "EnrollmentORM",
        back_populates="course",
    )

    def __repr__(self) -> str:
        return f"CourseORM(id={self.id!r}, code={self.code!r})"


class EnrollmentORM(Base):
    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("students.id"), nullable=False, index=True)
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), nullable=False, index=True)
    grade: Mapped[str | None] = mapped_column(String(8), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")
    enrollment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    student: Mapped["StudentORM"] = relationship("StudentORM", back_populates="enrollments")
    course: Mapped["CourseORM"] = relationship("CourseORM", back_populates="enrollments")

    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),)

    def __repr__(self) -> str:
        return (
            f"EnrollmentORM(id={self.id!r}, student_id={self.student_id!r}, "
            f"course_id={self.course_id!r})"
        )

User = UserORM
Student = StudentORM
Course = CourseORM
Enrollment = EnrollmentORM

__all__ = [
    "Base",
    "UserORM",
    "StudentORM",
    "CourseORM",
    "EnrollmentORM",
    "User",
    "Student",
    "Course",
    "Enrollment",
]

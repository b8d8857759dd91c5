from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel

from ...domain.entities import EnrollmentStatus


class ApiModel(BaseModel):
    # наружу camelCase, на вход принимаем и snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class LoginReq(ApiModel):
    email: EmailStr
    password: str

class TokenResp(ApiModel):
    access_token: str
    token_type: str = "bearer"

class PrincipalResp(ApiModel):
    id: int
    email: EmailStr
    name: str
    role: str


class StudentCreate(ApiModel):
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    date_of_birth: date | None = None
    enrollment_year: int | None = None
    major: str | None = None

    @field_validator(
        "phone", "address", "city", "zip_code", "date_of_birth", "enrollment_year", "major",
        mode="before",
    )
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)

class StudentOut(ApiModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    date_of_birth: date | None = None
    enrollment_year: int | None = None
    major: str | None = None
    status: str
    created_at: datetime


class CourseCreate(ApiModel):
    code: str
    title: str
    description: str | None = None
    credits: int
    semester: int

    @field_validator("description", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)

class CourseOut(ApiModel):
    id: int
    code: str
    title: str
    description: str | None = None
    credits: int
    semester: int
    created_at: datetime


class EnrollmentCreate(ApiModel):
    student_id: int
    course_id: int
    grade: str | None = None
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE

    @field_validator("grade", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return blank_to_none(value) or EnrollmentStatus.ACTIVE

class EnrollmentOut(ApiModel):
    id: int
    student_id: int
    course_id: int
    grade: str | None = None
    status: str
    enrollment_date: datetime


class DashboardStats(ApiModel):
    student_count: int
    course_count: int
    enrollment_count: int

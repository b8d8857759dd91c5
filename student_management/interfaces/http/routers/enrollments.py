from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ....infrastructure.db import get_db
from ....infrastructure.repositories import EnrollmentRepository
from ..authz import get_current_principal
from ..errors import unwrap
from ..schemas import EnrollmentCreate, EnrollmentOut

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"],
                   dependencies=[Depends(get_current_principal)])

DUPLICATE_ENROLLMENT = "Student is already enrolled in this course"
MISSING_REFERENCE = {"student": "Student not found", "course": "Course not found"}

@router.get("", response_model=list[EnrollmentOut])
def list_enrollments(db: Session = Depends(get_db)):
    return unwrap(EnrollmentRepository(db).find_many())

@router.post("", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
def create_enrollment(payload: EnrollmentCreate, db: Session = Depends(get_db)):
    result = EnrollmentRepository(db).create(
        student_id=payload.student_id,
        course_id=payload.course_id,
        grade=payload.grade,
        status=payload.status.value,
    )
    return unwrap(result, conflict=DUPLICATE_ENROLLMENT, not_found=MISSING_REFERENCE)

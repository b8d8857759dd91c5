from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ....infrastructure.db import get_db
from ....infrastructure.repositories import StudentRepository
from ..authz import get_current_principal
from ..errors import unwrap
from ..schemas import StudentCreate, StudentOut

router = APIRouter(prefix="/api/students", tags=["students"],
                   dependencies=[Depends(get_current_principal)])

DUPLICATE_EMAIL = "Student with this email already exists"

@router.get("", response_model=list[StudentOut])
def list_students(db: Session = Depends(get_db)):
    return unwrap(StudentRepository(db).find_many())

@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, db: Session = Depends(get_db)):
    result = StudentRepository(db).create(**payload.model_dump())
    return unwrap(result, conflict=DUPLICATE_EMAIL)

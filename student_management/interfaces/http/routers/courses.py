from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ....infrastructure.db import get_db
from ....infrastructure.repositories import CourseRepository
from ..authz import get_current_principal
from ..errors import unwrap
from ..schemas import CourseCreate, CourseOut

router = APIRouter(prefix="/api/courses", tags=["courses"],
                   dependencies=[Depends(get_current_principal)])

DUPLICATE_CODE = "Course with this code already exists"

@router.get("", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    return unwrap(CourseRepository(db).find_many())

@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, db: Session = Depends(get_db)):
    result = CourseRepository(db).create(**payload.model_dump())
    return unwrap(result, conflict=DUPLICATE_CODE)

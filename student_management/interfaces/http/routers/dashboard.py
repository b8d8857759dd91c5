from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ....infrastructure.db import get_db
from ....infrastructure.repositories import CourseRepository, EnrollmentRepository, StudentRepository
from ..authz import get_current_principal
from ..errors import unwrap
from ..schemas import DashboardStats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"],
                   dependencies=[Depends(get_current_principal)])

@router.get("/stats", response_model=DashboardStats)
def stats(db: Session = Depends(get_db)):
    counts = {
        name: unwrap(repo(db).count())
        for name, repo in (("student_count", StudentRepository),
                           ("course_count", CourseRepository),
                           ("enrollment_count", EnrollmentRepository))
    }
    return DashboardStats(**counts)

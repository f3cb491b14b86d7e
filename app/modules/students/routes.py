from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.students.schemas import StudentCreate, StudentResponse, StudentCreateResponse
from app.modules.students.service import StudentService
from app.core.dependencies import require_role
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/students", tags=["students"])


def get_student_service(supabase: Client = Depends(get_service_supabase)) -> StudentService:
    return StudentService(supabase)


@router.get("", response_model=List[StudentResponse])
async def list_students(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_role("teacher")),
    service: StudentService = Depends(get_student_service)
):
    """List students (teachers only), optionally filtered by email"""
    return service.list_students(search=search)


@router.post("", response_model=StudentCreateResponse, status_code=201)
async def add_student(
    student_data: StudentCreate,
    user_data: Dict = Depends(require_role("teacher")),
    service: StudentService = Depends(get_student_service)
):
    """Create a student account with a temporary password (teachers only)"""
    return service.add_student(student_data)

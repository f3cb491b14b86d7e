import logging
import secrets
import string
from datetime import datetime, timezone
from supabase import Client
from app.modules.students.models import TEMP_PASSWORD_LENGTH
from app.modules.students.schemas import StudentCreate, StudentResponse, StudentCreateResponse
from app.modules.profiles.models import UNDEFINED_TABLE, NO_ROWS
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def generate_temporary_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


class StudentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_students(self, search: Optional[str] = None) -> List[StudentResponse]:
        """List profiles with role 'student', newest first"""
        try:
            query = self.supabase.table("user_profiles")\
                .select("id, email, created_at")\
                .eq("role", "student")
            if search and search.strip():
                query = query.ilike("email", f"%{search.strip()}%")
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            if getattr(e, "code", None) == UNDEFINED_TABLE:
                logger.warning("user_profiles table doesn't exist; run the supabase migrations")
                return []
            logger.error(f"Error fetching students: {e}")
            raise HTTPException(status_code=500, detail="Failed to load students. Please try again.")
        return [StudentResponse(**row) for row in (result.data or [])]

    def _email_exists(self, email: str) -> bool:
        try:
            result = self.supabase.table("user_profiles")\
                .select("id")\
                .eq("email", email)\
                .single()\
                .execute()
        except Exception as e:
            code = getattr(e, "code", None)
            if code == NO_ROWS:
                return False
            if code == UNDEFINED_TABLE:
                raise HTTPException(
                    status_code=500,
                    detail="The user_profiles table doesn't exist. Apply the supabase migrations."
                )
            raise HTTPException(status_code=500, detail=str(e))
        return bool(result and result.data)

    def add_student(self, student_data: StudentCreate) -> StudentCreateResponse:
        """Create an auth user with a temporary password and make sure its profile is 'student'"""
        email = student_data.email
        if self._email_exists(email):
            raise HTTPException(status_code=400, detail="A user with this email already exists")

        password = generate_temporary_password()
        try:
            auth_response = self.supabase.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True
            })
        except Exception as e:
            logger.error(f"Error creating student {email}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to add student: {str(e)}")

        if not auth_response.user:
            raise HTTPException(status_code=500, detail="Failed to add student")
        user_id = auth_response.user.id

        try:
            self.supabase.table("user_profiles")\
                .update({"role": "student"})\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            # The signup trigger already created the row as 'student'
            logger.error(f"Error updating profile for student {user_id}: {e}")

        logger.info(f"Student {email} created ({user_id})")
        return StudentCreateResponse(
            id=user_id,
            email=email,
            created_at=auth_response.user.created_at or datetime.now(timezone.utc),
            last_sign_in=None,
            temporary_password=password,
            message="Student added successfully"
        )

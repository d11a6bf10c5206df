"""
Classroom CRUD Routes
Create, list, look up and delete classrooms.
"""
import logging
import secrets
import string
from typing import ClassVar, Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from api.models import (
    ClassroomEnvelope,
    ClassroomListResponse,
    ClassroomMessageResponse,
    ClassroomRequest,
    ClassroomResponse,
    MessageResponse,
)
from config.settings import get_settings
from src.database import classrooms as store
from src.database.db import get_db

logger = logging.getLogger("api.classrooms")

router = APIRouter(tags=["Classrooms"])


# ================== SCHEMAS ==================

class CreateClassroomRequest(ClassroomRequest):
    """Classroom creation body"""
    required_fields: ClassVar[Tuple[str, ...]] = ("classroom_name", "teacher_id", "teacher_name")
    missing_message: ClassVar[str] = "Classroom name, Teacher ID, and Teacher Name are required"

    classroom_name: str
    teacher_id: str
    teacher_name: str


# ================== HELPER FUNCTIONS ==================

def generate_classroom_code(length: int = 6) -> str:
    """Random code of uppercase letters, each drawn independently."""
    return ''.join(secrets.choice(string.ascii_uppercase) for _ in range(length))


def require(message: str, *values: str) -> None:
    """400 unless every value is a non-blank string."""
    if any(not value or not value.strip() for value in values):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def to_response(classroom) -> ClassroomResponse:
    return ClassroomResponse.model_validate(classroom)


# ================== ROUTES ==================

@router.get("/student/{user_id}", response_model=ClassroomListResponse)
def list_classrooms_for_student(user_id: str, db: Session = Depends(get_db)):
    """Classrooms the user is enrolled in as a student."""
    require("User ID is required", user_id)

    classrooms = store.list_for_student(db, user_id)
    return ClassroomListResponse(classrooms=[to_response(c) for c in classrooms])


@router.get("/teacher/{user_id}", response_model=ClassroomListResponse)
def list_classrooms_for_teacher(user_id: str, db: Session = Depends(get_db)):
    """Classrooms owned by the user."""
    require("User ID is required", user_id)

    classrooms = store.list_for_teacher(db, user_id)
    return ClassroomListResponse(classrooms=[to_response(c) for c in classrooms])


@router.post("/create", response_model=ClassroomMessageResponse)
def create_classroom(request: CreateClassroomRequest, db: Session = Depends(get_db)):
    """
    Create a classroom with a fresh join code and no students.

    Codes are regenerated while taken, at most `classroom_code_max_attempts`
    times; the unique index on the column catches the remaining race between
    two creators.
    """
    settings = get_settings()
    for _ in range(settings.classroom_code_max_attempts):
        classroom_code = generate_classroom_code(settings.classroom_code_length)
        if not store.code_exists(db, classroom_code):
            break
    else:
        raise RuntimeError(
            f"No free classroom code after {settings.classroom_code_max_attempts} attempts"
        )

    classroom = store.create_classroom(
        db,
        classroom_name=request.classroom_name,
        teacher_id=request.teacher_id,
        teacher_name=request.teacher_name,
        classroom_code=classroom_code,
    )

    logger.info(f"Classroom {classroom.id} ({classroom.classroom_code}) created by {classroom.teacher_id}")

    return ClassroomMessageResponse(
        message="Classroom created successfully",
        classroom=to_response(classroom)
    )


@router.get("/{classroom_id}", response_model=ClassroomEnvelope)
def get_classroom_by_code(classroom_id: str, db: Session = Depends(get_db)):
    """
    Look up one classroom.
    The value may be the classroom id or its join code.
    """
    require("Classroom code is required", classroom_id)

    classroom = store.find_by_id_or_code(db, classroom_id)
    if not classroom:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Classroom not found"
        )

    return ClassroomEnvelope(classroom=to_response(classroom))


@router.delete("/{user_id}/{classroom_id}", response_model=MessageResponse)
def delete_classroom(user_id: str, classroom_id: str, db: Session = Depends(get_db)):
    """Delete a classroom. Only its teacher may do this."""
    require("User ID and Classroom ID are required", user_id, classroom_id)

    classroom = store.get_classroom(db, classroom_id)
    if not classroom:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Classroom not found"
        )

    if classroom.teacher_id != user_id:
        logger.warning(f"User {user_id} tried to delete classroom {classroom_id} owned by {classroom.teacher_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not authorized to delete this classroom"
        )

    store.delete_classroom(db, classroom)

    logger.info(f"Classroom {classroom_id} deleted by {user_id}")

    return MessageResponse(message="Classroom deleted successfully")

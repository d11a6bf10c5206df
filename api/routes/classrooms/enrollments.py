"""
Student Enrollment Routes
Join and leave classrooms, resolve enrolled students' names.
"""
import logging
from typing import Any, ClassVar, List, Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import model_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.models import (
    ClassroomMessageResponse,
    ClassroomRequest,
    ClassroomResponse,
    MessageResponse,
    StudentName,
    StudentNamesResponse,
)
from src.database import classrooms as store
from src.database.db import get_db

logger = logging.getLogger("api.enrollments")

router = APIRouter(tags=["Enrollments"])


# ================== SCHEMAS ==================

class JoinClassroomRequest(ClassroomRequest):
    """Join by code"""
    required_fields: ClassVar[Tuple[str, ...]] = ("user_id", "classroom_code")
    missing_message: ClassVar[str] = "User ID and Classroom Code are required"

    user_id: str
    classroom_code: str


class LeaveClassroomRequest(ClassroomRequest):
    """Leave by classroom id"""
    required_fields: ClassVar[Tuple[str, ...]] = ("user_id", "classroom_id")
    missing_message: ClassVar[str] = "User ID and Classroom ID are required"

    user_id: str
    classroom_id: str


class StudentNamesRequest(ClassroomRequest):
    """Non-empty list of user ids"""
    missing_message: ClassVar[str] = "A list of student IDs is required"

    student_ids: List[str]

    @model_validator(mode="before")
    @classmethod
    def check_student_ids(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise cls.missing()
        ids = data.get("studentIds", data.get("student_ids"))
        if not isinstance(ids, list) or not ids:
            raise cls.missing()
        if not all(isinstance(i, str) and i.strip() for i in ids):
            raise cls.missing()
        return data


# ================== ROUTES ==================

@router.post("/join", response_model=ClassroomMessageResponse)
def join_classroom(request: JoinClassroomRequest, db: Session = Depends(get_db)):
    """
    Join a classroom with its code.
    Teachers cannot join their own classroom and nobody joins twice.
    """
    classroom = store.find_by_code(db, request.classroom_code)
    if not classroom:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Classroom not found"
        )

    if classroom.teacher_id == request.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Teachers cannot join their own classroom as students"
        )

    already_joined = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="You are already a student in this classroom"
    )

    classroom_id = classroom.id
    if store.is_student(db, classroom_id, request.user_id):
        raise already_joined

    try:
        # False when a concurrent join of the same user won the race
        if not store.add_student(db, classroom, request.user_id):
            raise already_joined
    except IntegrityError:
        if store.get_classroom(db, classroom_id) is None:
            logger.warning(f"Classroom {classroom_id} deleted while {request.user_id} was joining")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Classroom not found"
            )
        raise

    logger.info(f"User {request.user_id} joined classroom {classroom_id}")

    return ClassroomMessageResponse(
        message="Successfully joined the classroom",
        classroom=ClassroomResponse.model_validate(classroom)
    )


@router.post("/leave", response_model=MessageResponse)
def leave_classroom(request: LeaveClassroomRequest, db: Session = Depends(get_db)):
    """Leave a classroom the user is enrolled in."""
    classroom = store.get_classroom(db, request.classroom_id)
    if not classroom:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Classroom not found"
        )

    if not store.remove_student(db, classroom, request.user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not a student in this classroom"
        )

    logger.info(f"User {request.user_id} left classroom {classroom.id}")

    return MessageResponse(message="Successfully left the classroom")


@router.post("/students/names", response_model=StudentNamesResponse)
def get_student_names(request: StudentNamesRequest, db: Session = Depends(get_db)):
    """Resolve user ids to display names; unknown ids are left out."""
    users = store.find_users(db, request.student_ids)
    return StudentNamesResponse(
        students=[StudentName(id=user.id, name=user.name) for user in users]
    )

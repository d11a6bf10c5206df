"""
Classroom Service - Store Operations
Queries and mutations for classrooms and memberships. Every function takes the
session explicitly so callers decide its lifetime.
"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database.models import Classroom, ClassroomStudent, User

logger = logging.getLogger("src.database")


# ================== LOOKUPS ==================

def list_for_student(db: Session, user_id: str) -> List[Classroom]:
    """Classrooms whose students include user_id"""
    return (
        db.query(Classroom)
        .join(ClassroomStudent, ClassroomStudent.classroom_id == Classroom.id)
        .filter(ClassroomStudent.student_id == user_id)
        .order_by(Classroom.created_at, Classroom.id)
        .all()
    )


def list_for_teacher(db: Session, user_id: str) -> List[Classroom]:
    """Classrooms owned by user_id"""
    return (
        db.query(Classroom)
        .filter(Classroom.teacher_id == user_id)
        .order_by(Classroom.created_at, Classroom.id)
        .all()
    )


def get_classroom(db: Session, classroom_id: str) -> Optional[Classroom]:
    return db.query(Classroom).filter(Classroom.id == classroom_id).first()


def find_by_code(db: Session, classroom_code: str) -> Optional[Classroom]:
    return db.query(Classroom).filter(
        Classroom.classroom_code == classroom_code.upper()
    ).first()


def find_by_id_or_code(db: Session, value: str) -> Optional[Classroom]:
    """Match a classroom id first, then a join code"""
    return get_classroom(db, value) or find_by_code(db, value)


def code_exists(db: Session, classroom_code: str) -> bool:
    return db.query(Classroom.id).filter(
        Classroom.classroom_code == classroom_code
    ).first() is not None


def is_student(db: Session, classroom_id: str, user_id: str) -> bool:
    return db.query(ClassroomStudent.id).filter(
        ClassroomStudent.classroom_id == classroom_id,
        ClassroomStudent.student_id == user_id
    ).first() is not None


def find_users(db: Session, user_ids: Sequence[str]) -> List[User]:
    """
    Users matching user_ids, in request order.
    Unknown ids are skipped and repeated ids appear once.
    """
    wanted = list(dict.fromkeys(user_ids))
    users = db.query(User).filter(User.id.in_(wanted)).all()
    by_id = {user.id: user for user in users}
    return [by_id[user_id] for user_id in wanted if user_id in by_id]


# ================== MUTATIONS ==================

def create_classroom(
    db: Session,
    classroom_name: str,
    teacher_id: str,
    teacher_name: str,
    classroom_code: str
) -> Classroom:
    """Insert a classroom with an empty student list"""
    classroom = Classroom(
        classroom_name=classroom_name,
        classroom_code=classroom_code,
        teacher_id=teacher_id,
        teacher_name=teacher_name,
    )
    db.add(classroom)
    db.commit()
    db.refresh(classroom)
    return classroom


def delete_classroom(db: Session, classroom: Classroom) -> None:
    """Delete a classroom together with its memberships"""
    db.delete(classroom)
    db.commit()


def add_student(db: Session, classroom: Classroom, user_id: str) -> bool:
    """
    Append user_id to the classroom's students.

    The insert is guarded by the (classroom_id, student_id) unique constraint,
    so two concurrent joins cannot both succeed.

    Returns:
        False if the user was already enrolled

    Raises:
        IntegrityError for any other constraint failure, such as the
        classroom being deleted before the insert landed
    """
    classroom_id = classroom.id
    db.add(ClassroomStudent(classroom_id=classroom_id, student_id=user_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if not is_student(db, classroom_id, user_id):
            raise
        logger.info(f"Duplicate join ignored: {user_id} in {classroom_id}")
        return False

    db.refresh(classroom)
    return True


def remove_student(db: Session, classroom: Classroom, user_id: str) -> bool:
    """
    Remove user_id from the classroom's students with a single DELETE.

    Returns:
        False if the user was not enrolled
    """
    removed = db.query(ClassroomStudent).filter(
        ClassroomStudent.classroom_id == classroom.id,
        ClassroomStudent.student_id == user_id
    ).delete(synchronize_session=False)
    db.commit()

    if removed:
        db.refresh(classroom)
    return removed > 0

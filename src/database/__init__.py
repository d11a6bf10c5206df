# Database module
from src.database.models import (
    Base,
    User,
    Classroom,
    ClassroomStudent,
)
from src.database.db import (
    engine,
    SessionLocal,
    init_db,
    drop_db,
    get_db,
    get_db_context,
    reinitialize_engine,
)
from src.database.classrooms import (
    list_for_student,
    list_for_teacher,
    get_classroom,
    find_by_code,
    find_by_id_or_code,
    code_exists,
    is_student,
    find_users,
    create_classroom,
    delete_classroom,
    add_student,
    remove_student,
)

__all__ = [
    # Models
    "Base",
    "User",
    "Classroom",
    "ClassroomStudent",
    # Database
    "engine",
    "SessionLocal",
    "init_db",
    "drop_db",
    "get_db",
    "get_db_context",
    "reinitialize_engine",
    # Store operations
    "list_for_student",
    "list_for_teacher",
    "get_classroom",
    "find_by_code",
    "find_by_id_or_code",
    "code_exists",
    "is_student",
    "find_users",
    "create_classroom",
    "delete_classroom",
    "add_student",
    "remove_student",
]

# API module
from api.models import (
    ClassroomResponse,
    ClassroomListResponse,
    ClassroomEnvelope,
    ClassroomMessageResponse,
    MessageResponse,
    StudentName,
    StudentNamesResponse,
    HealthResponse,
    ErrorResponse
)
from api.main import app

__all__ = [
    "app",
    "ClassroomResponse",
    "ClassroomListResponse",
    "ClassroomEnvelope",
    "ClassroomMessageResponse",
    "MessageResponse",
    "StudentName",
    "StudentNamesResponse",
    "HealthResponse",
    "ErrorResponse",
]

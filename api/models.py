"""
Classroom Service - API Models
Request/Response models shared by the FastAPI endpoints
"""
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# Error type raised by request models; the validation handler reports its message as-is
MISSING_FIELDS_ERROR = "missing_fields"


class CamelModel(BaseModel):
    """Snake-case fields exposed as camelCase JSON keys"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ================== REQUEST MODELS ==================

class ClassroomRequest(CamelModel):
    """
    Base for request bodies.

    Subclasses list the fields that must be non-empty strings in
    `required_fields`; when any is absent, whitespace-only or mistyped the whole body is
    rejected with `missing_message`.
    """
    required_fields: ClassVar[Tuple[str, ...]] = ()
    missing_message: ClassVar[str] = "Missing required fields"

    @classmethod
    def missing(cls) -> PydanticCustomError:
        return PydanticCustomError(MISSING_FIELDS_ERROR, cls.missing_message)

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise cls.missing()
        for name in cls.required_fields:
            value = data.get(to_camel(name), data.get(name))
            if not isinstance(value, str) or not value.strip():
                raise cls.missing()
        return data


# ================== RESPONSE MODELS ==================

class ClassroomResponse(CamelModel):
    """A classroom with its enrolled student ids"""
    id: str
    classroom_name: str
    classroom_code: str
    teacher_id: str
    teacher_name: str
    students: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class ClassroomListResponse(BaseModel):
    classrooms: List[ClassroomResponse]


class ClassroomEnvelope(BaseModel):
    classroom: ClassroomResponse


class MessageResponse(BaseModel):
    message: str


class ClassroomMessageResponse(MessageResponse):
    """Mutation result carrying the updated classroom"""
    classroom: ClassroomResponse


class StudentName(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class StudentNamesResponse(BaseModel):
    students: List[StudentName]


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    services: Dict[str, str]


class ErrorResponse(BaseModel):
    """Error body; detail is only filled for 500s in debug mode"""
    error: str
    detail: Optional[str] = None

"""
Classroom Service - Database Models
SQLAlchemy ORM models for classrooms, memberships and users
"""
from sqlalchemy import (
    Column, String, Integer, ForeignKey, DateTime, UniqueConstraint, Index
)
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime
import uuid

Base = declarative_base()


# ================== USERS ==================

class User(Base):
    """User record owned by the account service; read-only here"""
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.id}: {self.name}>"


# ================== CLASSROOMS ==================

class Classroom(Base):
    """A teacher-owned group that students join with a shareable code"""
    __tablename__ = "classrooms"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    classroom_name = Column(String(200), nullable=False)
    classroom_code = Column(String(16), unique=True, index=True, nullable=False)

    # Owner, denormalized at creation
    teacher_id = Column(String(64), nullable=False, index=True)
    teacher_name = Column(String(100), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    memberships = relationship(
        "ClassroomStudent",
        back_populates="classroom",
        cascade="all, delete-orphan",
        order_by="ClassroomStudent.id",
    )

    @property
    def students(self):
        """Enrolled user ids in join order"""
        return [m.student_id for m in self.memberships]

    def __repr__(self):
        return f"<Classroom {self.classroom_code}: {self.classroom_name}>"


class ClassroomStudent(Base):
    """One enrolled student; the unique pair makes joining add-if-absent"""
    __tablename__ = "classroom_students"
    __table_args__ = (
        UniqueConstraint("classroom_id", "student_id", name="uq_classroom_student"),
        Index("ix_classroom_students_student_id", "student_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    classroom_id = Column(
        String(36), ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False
    )
    student_id = Column(String(64), nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow)

    classroom = relationship("Classroom", back_populates="memberships")

    def __repr__(self):
        return f"<ClassroomStudent {self.classroom_id}: {self.student_id}>"

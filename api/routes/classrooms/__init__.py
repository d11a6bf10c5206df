"""
Classroom Management API Routes
Classroom CRUD and student membership.
"""
from fastapi import APIRouter

from api.routes.classrooms.classroom import router as classroom_router
from api.routes.classrooms.enrollments import router as enrollments_router

router = APIRouter(prefix="/api/classrooms")

# Include sub-routers
# Static POST paths (/join, /leave, /students/names) are registered ahead of the
# /{classroom_id} routes so a future POST on a dynamic path cannot shadow them
router.include_router(enrollments_router)
router.include_router(classroom_router)

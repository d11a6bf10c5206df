# API Routes
from api.routes.classrooms import router as classrooms_router

__all__ = [
    "classrooms_router",
]

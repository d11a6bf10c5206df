"""
Classroom Service - FastAPI Application
Main application with CORS, error envelope and routes
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorResponse, HealthResponse, MISSING_FIELDS_ERROR
from api.routes import classrooms_router
from config.logging import configure_logging
from config.settings import get_settings
from src.database.db import get_db

logger = logging.getLogger("api.main")

INTERNAL_ERROR = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown"""
    configure_logging()
    logger.info("Classroom API starting")

    from src.database.db import init_db
    init_db()

    yield

    logger.info("Classroom API shutting down")


settings = get_settings()

app = FastAPI(
    title="Classroom API",
    description="""
    Classroom management service.

    ## Features
    - Create and delete classrooms
    - Join with a 6-letter code, leave by classroom id
    - List classrooms per student or teacher
    - Resolve enrolled students' names
    """,
    version=settings.app_version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ================== MIDDLEWARE ==================

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add X-Process-Time header to all responses"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


# ================== ERROR HANDLERS ==================

def error_response(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": ...}"""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Invalid input is a 400 carrying the request model's own message"""
    errors = exc.errors()
    first = errors[0] if errors else {}

    if first.get("type") == MISSING_FIELDS_ERROR:
        message = first["msg"]
    else:
        message = "Invalid request body"

    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Store failures never leak driver details"""
    logger.exception(f"Store failure on {request.method} {request.url.path}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR,
        str(exc) if get_settings().debug else None
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR,
        str(exc) if get_settings().debug else None
    )


# ================== ROUTES ==================

app.include_router(classrooms_router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": "Classroom API",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(db: Session = Depends(get_db)):
    """Health check with a database round-trip"""
    services = {"database": "unknown"}

    try:
        db.execute(text("SELECT 1"))
        services["database"] = "healthy"
    except SQLAlchemyError:
        logger.exception("Health check database query failed")
        services["database"] = "unhealthy"

    return HealthResponse(
        status="healthy" if services["database"] == "healthy" else "degraded",
        version=settings.app_version,
        services=services
    )


# ================== RUN ==================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

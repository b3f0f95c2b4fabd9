"""
Main FastAPI application entry point.
"""
import re
import uvicorn
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from routers import activity, admin, admins, advisor, buildings, departments, faculty, room_requests, schedule, subjects
from config import settings

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format=settings.log_format
)
logger = logging.getLogger(__name__)

# Initialize the FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Persistence and schedule advisory API for EduScheduler: room requests, published schedules, "
                "the department and building hierarchies, faculty, subjects and the AI conflict checker.",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded logo and other public assets
app.mount("/static", StaticFiles(directory=settings.public_dir, check_dir=False), name="static")

# Custom exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert FastAPI validation errors to human-friendly format.

    Expected format:
    {
        "errors": {
            "Field Name": ["Error message 1", "Error message 2"]
        }
    }
    """
    errors = {}

    for error in exc.errors():
        # Skip "body"/"query" prefix and build field name
        field_path = error.get("loc", [])
        if len(field_path) > 1 and field_path[0] in ("body", "query", "path"):
            field_path = field_path[1:]

        # facultyEmail / faculty_email -> Faculty Email
        field_name = " -> ".join(str(p) for p in field_path)
        field_name = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", field_name).replace("_", " ").title()

        error_msg = error.get("msg", "Invalid value")
        error_type = error.get("type", "")

        if error_type == "missing":
            error_msg = f"{field_name} is required."
        elif error_type == "string_too_short":
            min_length = error.get("ctx", {}).get("min_length", 1)
            if min_length > 1:
                error_msg = f"{field_name} must be at least {min_length} characters."
            else:
                error_msg = f"{field_name} must not be empty."
        elif error_type == "too_short":
            error_msg = f"{field_name} must contain at least one item."
        elif error_type == "literal_error":
            error_msg = f"{field_name}: {error_msg}"
        elif "greater_than" in error_type:
            error_msg = f"{field_name} must not be negative."
        else:
            error_msg = f"{field_name}: {error_msg}"

        errors.setdefault(field_name, []).append(error_msg)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"errors": errors}
    )

# Include routers
app.include_router(room_requests.router, prefix="/api/v1", tags=["room-requests"])
app.include_router(schedule.router, prefix="/api/v1", tags=["schedule"])
app.include_router(departments.router, prefix="/api/v1", tags=["departments"])
app.include_router(buildings.router, prefix="/api/v1", tags=["buildings"])
app.include_router(faculty.router, prefix="/api/v1", tags=["faculty"])
app.include_router(subjects.router, prefix="/api/v1", tags=["subjects"])
app.include_router(admin.router, prefix="/api/v1", tags=["admin"])
app.include_router(admins.router, prefix="/api/v1", tags=["admins"])
app.include_router(activity.router, prefix="/api/v1", tags=["activity"])
app.include_router(advisor.router, prefix="/api/v1", tags=["advisor"])

@app.get("/", tags=["health"])
async def root():
    """Root endpoint - API health check."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "healthy",
        "docs": "/docs"
    }

@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}

if __name__ == "__main__":
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload
    )

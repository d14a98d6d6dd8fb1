import logging
import time
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import ConfigurationError, get_settings
from .core.database import init_db, check_db_connection
from .core.exceptions import StoreError, TrackerError
from .routers import auth, catalog, reports, tasks

settings = get_settings()

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Task Tracker Service",
    description="Projects, teams, tags and tasks with reporting",
    version=settings.service_version
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if isinstance(exc, StoreError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Server error", "details": exc.message},
        )
    logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or None
    return JSONResponse(
        status_code=400,
        content={"error": first.get("msg", "Invalid request"), "field": field},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(status_code=500, content={"error": "Server misconfigured"})


app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
app.include_router(reports.router, prefix="/report", tags=["reports"])


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Starting Task Tracker Service...")
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not set; token issuance and verification will fail")
    if not settings.admin_secret:
        logger.warning("ADMIN_SECRET is not set; admin login is disabled")

    if init_db():
        logger.info("Database initialized successfully")
    else:
        logger.error("Database initialization failed")

    logger.info("Task Tracker Service startup completed")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "status": "running",
        "message": "Task Tracker Service is operational"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    db_healthy = check_db_connection()
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "status": "healthy" if db_healthy else "unhealthy",
        "database": "connected" if db_healthy else "disconnected",
        "timestamp": time.time()
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tracker_service.main:app", host="0.0.0.0", port=4000, reload=True)

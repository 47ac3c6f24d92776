"""
MedTrack API - Main Application
FastAPI application with CORS, error handling, request logging and the
device, installation, service, contract, photo and facility routers
"""
import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from medtrack.api.routes import (
    contracts_router,
    dashboard_router,
    devices_router,
    export_router,
    facilities_router,
    installations_router,
    photo_logs_router,
    service_visits_router,
)
from medtrack.core.config import settings
from medtrack.core.exceptions import EmptyExportError, FormValidationError
from medtrack.database import check_connection, close_db_connection, init_db


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# Initialize FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.PROJECT_DESCRIPTION,
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)


# ==================== MIDDLEWARE ====================


# Compression: GZip responses (CSV exports can be large)
app.add_middleware(GZipMiddleware, minimum_size=1000)


# CORS: the browser front end is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "Content-Length"],
    max_age=3600,
)


# ==================== ROUTERS ====================


api = settings.API_PREFIX
app.include_router(devices_router, prefix=f"{api}/devices", tags=["Devices"])
app.include_router(installations_router, prefix=f"{api}/installations", tags=["Installations"])
app.include_router(service_visits_router, prefix=f"{api}/service-visits", tags=["Service Visits"])
app.include_router(contracts_router, prefix=f"{api}/contracts", tags=["Contracts"])
app.include_router(photo_logs_router, prefix=f"{api}/photo-logs", tags=["Photo Logs"])
app.include_router(facilities_router, prefix=f"{api}/facilities", tags=["Facilities"])
app.include_router(export_router, prefix=f"{api}/export", tags=["Export"])
app.include_router(dashboard_router, prefix=f"{api}/dashboard", tags=["Dashboard"])


# ==================== ERROR HANDLERS ====================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors with detailed response"""
    logger.warning(f"Validation error on {request.url}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "detail": "Validation error",
            "errors": exc.errors()
        }
    )


@app.exception_handler(FormValidationError)
async def form_validation_exception_handler(request: Request, exc: FormValidationError):
    """Per-field form messages; nothing was changed"""
    logger.info(f"[FORM] Rejected {request.method} {request.url.path}: {exc.errors}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "detail": "Form validation failed",
            "errors": exc.errors
        }
    )


@app.exception_handler(ValidationError)
async def model_validation_exception_handler(request: Request, exc: ValidationError):
    """An update produced a record that does not fit its model"""
    logger.warning(f"Model validation error on {request.url}: {exc.error_count()} error(s)")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "detail": "Validation error",
            "errors": exc.errors(include_url=False, include_context=False, include_input=False)
        }
    )


@app.exception_handler(EmptyExportError)
async def empty_export_exception_handler(request: Request, exc: EmptyExportError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "detail": str(exc)
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

    # Don't expose internal errors in production
    error_message = str(exc) if settings.DEBUG else "Internal server error"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "detail": error_message,
            "timestamp": _now()
        }
    )


# ==================== HEALTH & STATUS ENDPOINTS ====================


@app.get("/", tags=["System"])
async def root():
    """Root endpoint - API information"""
    return {
        "success": True,
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "app_name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": f"{settings.API_PREFIX}/docs",
        "status": "operational",
        "environment": "production" if not settings.DEBUG else "development"
    }


@app.get("/health", tags=["System"])
def health_check():
    """Health check endpoint; storage problems degrade but never fail the app"""
    connection_ok = check_connection()
    return {
        "success": True,
        "status": "healthy" if connection_ok else "degraded",
        "database": "connected" if connection_ok else "disconnected",
        "timestamp": _now(),
    }


# ==================== STARTUP & SHUTDOWN ====================


@app.on_event("startup")
async def startup_event():
    """Run on application startup"""
    logger.info("="*70)
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info("="*70)
    logger.info(f"Environment: {'Production' if not settings.DEBUG else 'Development'}")

    # Create the snapshot table NON-BLOCKING; the store falls back to defaults without it
    logger.info("Initializing database tables...")
    if init_db():
        logger.info("[OK] Database initialization complete!")
    else:
        logger.warning("[WARN] Database init returned False - state will not be persisted")

    logger.info("[OK] Application startup complete!")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown"""
    logger.info("Shutting down application...")
    close_db_connection()
    logger.info("Application shutdown complete")


# ==================== REQUEST LOGGING ====================


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    # Skip logging for health checks
    if request.url.path == "/health":
        return await call_next(request)

    start_time = datetime.now(timezone.utc)
    client = request.client.host if request.client else "-"
    logger.info(f">> {request.method} {request.url.path} - {client}")

    try:
        response = await call_next(request)
        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.info(f"<< {request.method} {request.url.path} - {response.status_code} ({duration:.2f}s)")
        return response
    except Exception as e:
        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.error(f"[ERROR] {request.method} {request.url.path} - Error: {str(e)} ({duration:.2f}s)")
        raise

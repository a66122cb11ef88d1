import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401
from .config import (
    ALLOWED_ORIGINS,
    API_PREFIX,
    APP_ENV,
    IS_DEVELOPMENT,
    PORT,
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
    SECURITY_HEADERS_ENABLED,
)
from .database import Base, engine
from .domain.appointment_types.router import router as appointment_types_router
from .domain.appointments.router import router as appointments_router
from .domain.auth.router import router as auth_router
from .domain.clients.router import router as clients_router
from .errors import AppError, ConflictError, NotFoundError, UnauthorizedError, ValidationError
from .rate_limiter import create_rate_limiter
from .security_headers import SecurityHeadersMiddleware
from .shared.schemas import ApiResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("passlib").setLevel(logging.ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Application starting up ({APP_ENV})...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Another worker may have created the tables first
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    yield
    logger.info("Application shutting down...")


app_dependencies = []
if RATE_LIMIT_ENABLED:
    api_rate_limiter = create_rate_limiter(RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS, key_prefix="api")
    app_dependencies.append(Depends(api_rate_limiter))
    logger.info(f"Rate limiting enabled: {RATE_LIMIT_MAX_REQUESTS} requests per {RATE_LIMIT_WINDOW_SECONDS}s per IP")

app = FastAPI(title="ClinicApp API", version="1.0.0", lifespan=lifespan, dependencies=app_dependencies)


def render_error(exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content={"success": False, "error": exc.to_dict()}, headers=exc.headers
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} - {exc.status_code} {exc.code}: {exc.message}")
    return render_error(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Report a malformed Authorization header as 401 rather than 422,
    everything else as a 422 listing the failing fields
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return render_error(UnauthorizedError("No token provided", code="NO_TOKEN"))

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    fields = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return render_error(ValidationError("Validation failed", details={"errors": fields}))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"{request.method} {request.url.path} - Integrity error: {exc.orig}")
    return render_error(ConflictError("Resource already exists", code="DUPLICATE_ENTRY"))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return render_error(NotFoundError(f"Route {request.method} {request.url.path} not found"))
    if exc.status_code == 405:
        return render_error(AppError("Method not allowed", code="METHOD_NOT_ALLOWED", status_code=405))
    return render_error(AppError(str(exc.detail), code="HTTP_ERROR", status_code=exc.status_code))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} - Error: {str(exc)}", exc_info=exc)
    message = str(exc) if IS_DEVELOPMENT else "Internal server error"
    return render_error(AppError(message, code="INTERNAL_ERROR"))


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(clients_router, prefix=API_PREFIX)
app.include_router(appointments_router, prefix=API_PREFIX)
app.include_router(appointment_types_router, prefix=API_PREFIX)


@app.get("/health", response_model=ApiResponse[dict])
def health():
    return ApiResponse(
        data={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": APP_ENV,
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("clinicapp.main:app", host="0.0.0.0", port=PORT, reload=IS_DEVELOPMENT)

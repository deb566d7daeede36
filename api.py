"""
Classbook FastAPI Application

Main entry point for the Classbook API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

# Common library imports
from common.database import MongoDB
from common.utils import success_response, BadRequestException

# App-specific imports
from classbook import __version__
from classbook.config import settings
from classbook.auth.exceptions import PersistenceError
from classbook.auth.middleware import ACCESS_TOKEN_HEADER, REFRESH_TOKEN_HEADER, USER_ID_HEADER
from classbook.routers import users_router, students_router, classrooms_router
from classbook.dependencies import init_all_services, get_credential_store

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Validates settings, connects to MongoDB and initialises services on
    startup; closes the connection on shutdown.
    """
    logger.info("Starting Classbook API...")
    settings.validate_required()

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )

    init_all_services(db=main_db.db, settings=settings)
    await get_credential_store().ensure_indexes()
    logger.info("Classbook API started successfully")

    yield

    logger.info("Shutting down Classbook API...")
    await main_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="Classbook API",
    description="Classroom management for teachers",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_methods=["GET", "POST", "HEAD", "OPTIONS", "PUT", "PATCH", "DELETE"],
    allow_headers=[
        "Origin",
        "X-Requested-With",
        "Content-Type",
        "Accept",
        ACCESS_TOKEN_HEADER,
        REFRESH_TOKEN_HEADER,
        USER_ID_HEADER,
    ],
    expose_headers=[ACCESS_TOKEN_HEADER, REFRESH_TOKEN_HEADER],
)


# =============================================================================
# Error Handlers
# =============================================================================
# Both handlers answer with the same {"detail": {message, code, ...}} body
# FastAPI produces for an APIException raised inside a route.
def _api_error(exc) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400)."""
    return _api_error(BadRequestException(
        message="Invalid request",
        code="VALIDATION_ERROR",
        details=jsonable_encoder(exc.errors()),
    ))


@app.exception_handler(PyMongoError)
async def storage_error_handler(request: Request, exc: PyMongoError):
    """Storage failures that escaped a service are reported as 503."""
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
    return _api_error(PersistenceError())


# =============================================================================
# Include Routers
# =============================================================================
app.include_router(users_router)
app.include_router(students_router)
app.include_router(classrooms_router)


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and database connection.
    """
    return success_response({
        "status": "ok",
        "version": __version__,
        "database": main_db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )

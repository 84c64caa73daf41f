"""
RepairDesk API - Main Application Entry Point
Suivi des réparations : clients, appareils et fiches de réparation.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from repairdesk.core.config import settings
from repairdesk.core.database import Database
from repairdesk.core.exceptions import StoreError
from repairdesk.api.router import api_router


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Opens the store connection at startup and closes it at shutdown.
    """
    logger.info("Starting %s v%s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)

    database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    await database.connect()
    app.state.db = database

    # Initialize database tables (for development)
    if settings.is_development:
        await database.create_all()
        logger.info("Database tables initialized")

    yield

    logger.info("Shutting down")
    await database.close()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## RepairDesk API

Repair-shop job tracking.

* **Clients** - customers and their contact details
* **Devices** - items brought in by a client
* **Repairs** - repair jobs with a code, an emergency level and a status
    """,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as {"message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Request validation failed",
            "errors": errors,
        },
    )


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Store failures surface as a generic 500."""
    logger.exception("Store error on %s %s", request.method, request.url.path)
    error = StoreError()
    return JSONResponse(
        status_code=error.status_code,
        content={"message": error.detail},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# Include API router
app.include_router(api_router)


# Health check endpoint
@app.get(
    "/health",
    tags=["Health"],
    summary="Server health check",
)
async def health_check():
    """Check if the API is running."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Root endpoint
@app.get(
    "/",
    tags=["Info"],
    summary="API information",
)
async def root(request: Request):
    """Service info, including whether the store answers."""
    database: Database | None = getattr(request.app.state, "db", None)
    db_error = None
    try:
        connected = database is not None and await database.ping()
    except SQLAlchemyError as exc:
        connected = False
        db_error = exc.__class__.__name__

    return {
        "message": "The repair tracking system is up and running",
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": "Production" if settings.is_production else "Development",
        "database": "connected" if connected else "unavailable",
        "databaseError": db_error,
        "docs": "/docs" if settings.is_development else "Disabled in production",
        "health": "/health",
    }


# For running with uvicorn directly
if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "repairdesk.main:app",
        host=settings.HOST,
        port=port,
        reload=settings.is_development,
    )

"""
FastAPI main application for the Book Records API.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import APIConfig, config
from api.database import BookDatabaseService
from api.models import HealthResponse
from api.routes import router as books_router
from api.service import BookService
from utilities.logger import setup_logging

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[APIConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The MongoDB client is opened in the lifespan; the database and book
    services it backs are stored on ``app.state``.
    """
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        setup_logging(
            log_level=settings.log_level,
            log_format=settings.log_format,
            log_file=settings.log_file,
            debug=settings.debug
        )
        logger.info("Starting Book Records API", prefix=settings.api_prefix)

        client = AsyncIOMotorClient(settings.mongodb_url)
        try:
            database = client[settings.mongodb_database]
            await database.command("ping")
            logger.info(
                "Database connection established",
                database=settings.mongodb_database,
                collection=settings.mongodb_collection
            )
        except Exception as e:
            logger.error("Failed to connect to database", error=str(e))
            client.close()
            raise

        db_service = BookDatabaseService(database, settings.mongodb_collection)
        app.state.db_service = db_service
        app.state.book_service = BookService(db_service)

        yield

        logger.info("Shutting down Book Records API")
        client.close()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle malformed request bodies."""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "message": "Invalid request body",
                "detail": jsonable_encoder(exc.errors())
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc)}
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint."""
        db_status = "unavailable"
        db_service = getattr(request.app.state, "db_service", None)
        if db_service:
            health_info = await db_service.health_check()
            db_status = health_info.get("status", "unknown")

        return HealthResponse(
            status="healthy" if db_status == "healthy" else "degraded",
            timestamp=datetime.utcnow(),
            version=settings.api_version,
            database_status=db_status
        )

    app.include_router(books_router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )

# File: fellowship/main.py
import time
import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from fellowship.api.v1.api import api_router, ws_router
from fellowship.core.config import settings
from fellowship.core.exceptions import ApiError, ValidationError
from fellowship.core.identity import build_identity_verifiers
from fellowship.core.rate_limit import InvitationRateLimiter
from fellowship.core.websocket_manager import ConnectionRegistry
from fellowship.db.database import get_db

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Shared in-process state, owned by this application instance
    app.state.registry = ConnectionRegistry()
    app.state.invitation_rate_limiter = InvitationRateLimiter()
    app.state.identity_verifiers = build_identity_verifiers()
    logger.info(f"🚀 {settings.PROJECT_NAME} starting ({settings.ENVIRONMENT})")
    yield
    logger.info("Shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time"],
        max_age=3600,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({process_time:.4f}s)")
        return response

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError()
        content = error.to_dict()
        content["errors"] = jsonable_encoder(exc.errors())
        return JSONResponse(status_code=error.status_code, content=content)

    @app.get("/health")
    def health_check(db: Session = Depends(get_db)):
        """Health check with database connectivity"""
        try:
            db.execute(text("SELECT 1"))
            database = "connected"
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            database = "unavailable"
        return {
            "status": "healthy" if database == "connected" else "degraded",
            "database": database,
            "environment": settings.ENVIRONMENT,
        }

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(ws_router)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(
        "fellowship.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        ws_ping_interval=settings.WEBSOCKET_HEARTBEAT_INTERVAL,
        ws_ping_timeout=settings.WEBSOCKET_HEARTBEAT_INTERVAL,
    )


if __name__ == "__main__":
    main()

"""FastAPI application factory"""

import logging
import time
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from business_ledger.api.dependencies import get_request_id
from business_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from business_ledger.api.responses import send_response
from business_ledger.api.routes import assistant, records
from business_ledger.domain.exceptions import NotFoundError, StorageError, ValidationError
from business_ledger.infrastructure.database.session import engine, init_db
from business_ledger.infrastructure.observability.logging import setup_logging
from business_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(engine)
    logging.info(f"{settings.service_name} ready on port {settings.port}")
    yield


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto the response envelope"""

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return send_response(400, False, exc.messages, "Validation Error")

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
        return send_response(400, False, messages, "Validation Error")

    @app.exception_handler(NotFoundError)
    async def not_found_error(request: Request, exc: NotFoundError):
        entity = records.ENTITY_NAMES.get(exc.collection, "Record")
        return send_response(404, False, None, f"{entity} not found")

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        logging.error(f"Storage error: {exc}", extra={"request_id": get_request_id(request)})
        return send_response(500, False, None, "Server Error")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logging.error(f"Unexpected error: {exc}", extra={"request_id": get_request_id(request)})
        return send_response(500, False, None, "Server Error")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Business Ledger",
        description="Bookkeeping ledger with derived metrics and a business assistant",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/api/health")
    def health_check():
        return send_response(
            200,
            True,
            {"uptime": round(time.monotonic() - STARTED_AT, 3), "timestamp": int(time.time() * 1000)},
            "Server is healthy",
        )

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Assistant first: its fixed path must win over the generic collection routes
    app.include_router(assistant.router, prefix="/api", tags=["assistant"])
    app.include_router(records.router, prefix="/api", tags=["ledger"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn"""
    uvicorn.run("business_ledger.api.main:app", host="0.0.0.0", port=settings.port)

"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from payment_core.api.exception_handlers import setup_exception_handlers
from payment_core.api.middleware import RequestIDMiddleware, MetricsMiddleware
from payment_core.api.v1 import bank, payments
from payment_core.infrastructure.observability.logging import setup_logging
from payment_core.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Payment Core",
        description="Bank detail validation, money checks and provider error mapping",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    setup_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(bank.router, prefix="/v1", tags=["bank-details"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()

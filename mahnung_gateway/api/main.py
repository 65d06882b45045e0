"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from mahnung_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from mahnung_gateway.api.v1 import assessment, late_fee, rvg
from mahnung_gateway.domain.fee_table import fee_table_registry
from mahnung_gateway.infrastructure.fee_table_file import install_fee_table
from mahnung_gateway.infrastructure.observability.logging import setup_logging
from mahnung_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)

# Statutory table override is read once at start-up
if settings.rvg_table_path is not None:
    install_fee_table(settings.rvg_table_path, fee_table_registry)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Mahnung Fee Gateway",
        description="Statutory late-payment interest and RVG fee estimates for payment reminders",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(late_fee.router, prefix="/v1", tags=["late-fees"])
    app.include_router(rvg.router, prefix="/v1", tags=["rvg"])
    app.include_router(assessment.router, prefix="/v1", tags=["assessments"])

    return app


app = create_app()

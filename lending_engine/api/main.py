"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from lending_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from lending_engine.api.v1 import stages, risk, amortization, loans
from lending_engine.infrastructure.observability.logging import setup_logging
from lending_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Lending Decision Engine",
        description="Stage lifecycle, risk scoring, and amortization service",
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
    app.include_router(stages.router, prefix="/v1", tags=["stages"])
    app.include_router(risk.router, prefix="/v1", tags=["risk"])
    app.include_router(amortization.router, prefix="/v1", tags=["amortization"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])

    return app


app = create_app()

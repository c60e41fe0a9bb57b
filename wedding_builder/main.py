"""
Wedding Builder - Main Application Entry Point
Multi-tenant wedding website builder
"""

from fastapi import FastAPI, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import structlog

from wedding_builder.core.config import get_settings
from wedding_builder.core.events import event_bus, subscribe_audit_log
from wedding_builder.core.host_routing import HostRoutingMiddleware
from wedding_builder.api import couple, site, templates, webhooks, weddings

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing Wedding Builder backend", base_domain=settings.BASE_DOMAIN)
    subscribe_audit_log(event_bus)
    # Tables are created by Alembic migrations, not auto-generated
    logger.info("Database managed by Alembic migrations")

    yield

    # Shutdown
    logger.info("Shutting down Wedding Builder backend")


# Create FastAPI application
app = FastAPI(
    title="Wedding Builder API",
    description="Multi-tenant wedding websites served from versioned templates",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)
app.add_middleware(HostRoutingMiddleware)

# Include routers
app.include_router(weddings.router, prefix="/app/admin/weddings", tags=["weddings"])
app.include_router(templates.router, prefix="/app/admin/templates", tags=["templates"])
app.include_router(couple.router, prefix="/app/couple", tags=["couple"])
app.include_router(webhooks.router, prefix="/webhooks", tags=["webhooks"])
app.include_router(site.router, tags=["site"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "wedding-builder-api"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Wedding Builder API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get(settings.LOGIN_PATH)
async def login(next: Optional[str] = Query(default=None)):
    """Sign-in is handled by the identity provider; this only reports where to return"""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": "Authentication required", "next": next},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "wedding_builder.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )

from contextlib import asynccontextmanager
import structlog
from fastapi import FastAPI
from .config.logging_config import configure_logging
from .config.settings import settings
from .routes import autocomplete_routes, health_routes, search_routes
from .services.container import container

configure_logging(settings.debug)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting API",
        title=settings.api_title,
        version=settings.api_version,
        backend=settings.search_backend,
        min_keyword_length=settings.min_keyword_length,
        debounce_ms=settings.debounce_ms,
    )
    yield
    logger.info("Shutting down API")
    await container.search_service.close()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan
)

# Include routers with API prefix
app.include_router(search_routes.router, prefix="/api", tags=["search"])
app.include_router(autocomplete_routes.router, prefix="/api", tags=["autocomplete"])
app.include_router(health_routes.router, prefix="/api", tags=["health"])


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": settings.api_title,
        "version": settings.api_version,
        "description": settings.api_description,
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "search": "/api/search",
            "autocomplete": "/api/autocomplete/ws",
            "health": "/api/health"
        },
        "backend": settings.search_backend,
        "min_keyword_length": settings.min_keyword_length,
        "debounce_ms": settings.debounce_ms
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

"""
Catalog API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from catalog_api.core.cors import configure_cors
from catalog_api.core.lifespan import lifespan
from catalog_api.core.middlewares import register_middlewares
from catalog_api.routers.books import router as books_router
from catalog_api.routers.clubs import router as clubs_router
from catalog_api.routers.public import health_router
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware


# Create FastAPI application
app = FastAPI(
    title="Catalog REST API",
    description="Books and football clubs with optimistic locking",
    version="1.0.0",
    lifespan=lifespan,
)

# Middlewares run in reverse order of registration: correlation ID first
register_middlewares(app)
configure_cors(app)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(books_router)
app.include_router(clubs_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )

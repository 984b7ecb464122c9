"""
FastAPI application entry point for Document Tagger.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from doc_tagger.api.dependencies import get_llm_client, get_prompt_builder, get_tag_catalog
from doc_tagger.api.error_handlers import EXCEPTION_HANDLERS
from doc_tagger.api.middleware import RequestTracingMiddleware
from doc_tagger.api.routes_sync import router
from doc_tagger.config import settings
from doc_tagger.llm.exceptions import TaggingError
from doc_tagger.logging_config import configure_logging
from doc_tagger.tags.catalog import TagCatalogError

# Configure structured logging before the app is built
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Document Tagger",
    description="Tags documents with an LLM using an existing tag catalog",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["tagging"])


@app.on_event("startup")
async def startup():
    """Application startup - load templates and tag catalog, check configuration."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        model=settings.OPENAI_MODEL,
        custom_base_url=bool(settings.OPENAI_BASE_URL),
    )

    get_prompt_builder()

    try:
        catalog = get_tag_catalog()
        logger.info("Tag catalog loaded", tag_count=len(catalog))
    except TagCatalogError as e:
        logger.error("Tag catalog not available", error=e.message, details=e.details)

    try:
        get_llm_client()
    except (TaggingError, TagCatalogError) as e:
        # Requests will fail with the same error until the config is fixed
        logger.error("Tagging client not configured", error=str(e))

    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close the completion client."""
    logger.info("Application shutdown")
    if get_llm_client.cache_info().currsize:
        await get_llm_client().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "tags": "/tags",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "doc_tagger.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )

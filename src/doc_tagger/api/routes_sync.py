"""
API routes for document tagging.

One request in, one completion call out: POST /tags waits for the model
(bounded by the request timeout) and returns the merged tag list.
"""

import time
from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from doc_tagger.api.dependencies import (
    create_llm_client,
    get_llm_client,
    get_settings,
    get_tag_catalog,
)
from doc_tagger.api.models import (
    ErrorResponse,
    HealthResponse,
    TagDocumentRequest,
    TagDocumentResponse,
    VersionResponse,
)
from doc_tagger.config import Settings
from doc_tagger.llm.base_client import BaseLLMClient
from doc_tagger.llm.exceptions import TaggingError
from doc_tagger.llm.tool import TAG_DOCUMENT_TOOL
from doc_tagger.models.llm_models import resolve_model_info
from doc_tagger.tags.catalog import TagCatalogError

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/tags",
    response_model=TagDocumentResponse,
    status_code=status.HTTP_200_OK,
    summary="Tag a document",
    description="""
    Ask the configured model for tags describing the document.

    Returns existing catalog tags first, then tags the model proposed.
    Failures are returned with the error kind and a user-facing message.
    """,
    responses={
        200: {"description": "Tags generated"},
        400: {"model": ErrorResponse, "description": "Invalid request format"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        402: {"model": ErrorResponse, "description": "Out of credits"},
        413: {"model": ErrorResponse, "description": "Document too long"},
        429: {"model": ErrorResponse, "description": "Rate limited"},
        502: {"model": ErrorResponse, "description": "Provider or custom endpoint failure"},
        503: {"model": ErrorResponse, "description": "Provider overloaded"},
    },
)
async def tag_document(
    request: TagDocumentRequest,
    llm_client: BaseLLMClient = Depends(get_llm_client),
) -> TagDocumentResponse:
    """
    Tag a single document.

    Args:
        request: Document text and optional model override
        llm_client: Default tagging client (injected)

    Returns:
        TagDocumentResponse with the merged tag list
    """
    start_time = time.perf_counter()

    client = llm_client
    if request.model_id and request.model_id != llm_client.model_name:
        client = create_llm_client(request.model_id)

    logger.info(
        "Tagging request received",
        model=client.model_name,
        document_length=len(request.document),
    )

    try:
        tags = await client.generate_tags(request.document)
    finally:
        if client is not llm_client:
            await client.close()

    duration_ms = int((time.perf_counter() - start_time) * 1000)
    logger.info("Tagging completed", model=client.model_name, tag_count=len(tags), duration_ms=duration_ms)

    return TagDocumentResponse(
        status="success",
        tags=tags,
        model_id=client.model_name,
        tool_use=client.model_info.tool_use,
        duration_ms=duration_ms,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Service healthy"},
        503: {"description": "Completion API or tag catalog unavailable"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
):
    """
    Check the completion endpoint and the tag catalog.

    Returns:
        HealthResponse with service statuses (503 if any is down)
    """
    services = {}

    try:
        catalog = get_tag_catalog()
        services["tag_catalog"] = f"ok ({len(catalog)} tags)"
    except TagCatalogError as e:
        services["tag_catalog"] = f"error ({e.message})"

    try:
        client = get_llm_client()
        services["completion_api"] = "ok" if await client.health_check() else "unreachable"
    except (TaggingError, TagCatalogError) as e:
        services["completion_api"] = f"not_configured ({type(e).__name__})"

    healthy = all(value.startswith("ok") for value in services.values())
    health_status = "healthy" if healthy else "unhealthy"

    logger.info("Health check", status=health_status, services=services)

    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
        timestamp=datetime.utcnow(),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/tool-schema",
    summary="Get the tag_document function declaration",
    description="Returns the tool sent to tool-capable models to force structured tag output.",
)
async def get_tool_schema():
    """Return the tag_document tool declaration."""
    return TAG_DOCUMENT_TOOL


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Get model and request configuration",
)
async def get_version(
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    """Return version and completion settings (never the API key)."""
    model_info = resolve_model_info(settings.OPENAI_MODEL, settings.LLM_TOOL_USE)
    return VersionResponse(
        version=settings.APP_VERSION,
        model_id=model_info.model_id,
        tool_use=model_info.tool_use,
        custom_base_url=bool(settings.OPENAI_BASE_URL),
        temperature=settings.LLM_TEMPERATURE,
        timeout_ms=settings.LLM_TIMEOUT_MS,
    )

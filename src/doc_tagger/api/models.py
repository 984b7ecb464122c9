"""
API-specific request and response models for FastAPI endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TagDocumentRequest(BaseModel):
    """Request for the tagging endpoint."""

    document: str = Field(
        min_length=1,
        description="Raw document text to tag"
    )
    model_id: Optional[str] = Field(
        default=None,
        description="Model override (default: OPENAI_MODEL)",
        examples=["gpt-4o-mini"]
    )


class TagDocumentResponse(BaseModel):
    """Response for the tagging endpoint."""

    status: str = Field(
        description="Request status",
        examples=["success"]
    )
    tags: list[str] = Field(
        description="Existing tags followed by new tags, '#'-prefixed and unique"
    )
    model_id: str = Field(
        description="Model that produced the tags"
    )
    tool_use: bool = Field(
        description="Whether structured output (tool calling) was used"
    )
    duration_ms: int = Field(
        ge=0,
        description="Processing duration in milliseconds"
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"]
    )
    version: str = Field(
        description="Application version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Service-specific health status",
        examples=[{"completion_api": "ok", "tag_catalog": "ok (42 tags)"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""

    version: str = Field(
        description="Application version"
    )
    model_id: str = Field(
        description="Default model identifier"
    )
    tool_use: bool = Field(
        description="Whether the default model uses tool calling"
    )
    custom_base_url: bool = Field(
        description="Whether a custom OpenAI-compatible endpoint is configured"
    )
    temperature: float
    timeout_ms: int


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error kind",
        examples=["rate_limited", "invalid_credentials", "generic_failure"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[list | dict] = Field(
        default=None,
        description="Additional error details (request validation only)"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp (UTC)"
    )

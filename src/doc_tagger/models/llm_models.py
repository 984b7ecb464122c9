"""
LLM-specific data models for the tagging request/response cycle.

These models are internal to the LLM layer: the chat messages sent to the
completion endpoint, the model capability registry, and the tag lists
returned by the model before they are merged for the caller.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, ConfigDict


class ChatMessage(BaseModel):
    """One message of a chat-completion prompt."""
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"] = Field(..., description="Message author role")
    content: str = Field(..., description="Message text")


class LLMModelInfo(BaseModel):
    """
    Capabilities of a completion model.

    Only tool calling matters for tagging: it decides whether the request
    forces the tag_document function or falls back to free-text parsing.
    """
    model_config = ConfigDict(frozen=True)

    model_id: str = Field(..., description="Model identifier sent to the API (e.g., 'gpt-4o-mini')")
    tool_use: bool = Field(default=False, description="Model supports function/tool calling")


class TagResponse(BaseModel):
    """
    Tags as returned by the model, before merging.

    Field names follow the tag_document tool schema (``tags`` / ``newTags``).
    """
    model_config = ConfigDict(populate_by_name=True)

    tags: list[str] = Field(default_factory=list, description="Existing catalog tags used")
    new_tags: list[str] = Field(
        default_factory=list,
        alias="newTags",
        description="New tags proposed by the model",
    )


# Chat models known to support forced tool calling
TOOL_USE_MODELS: tuple[str, ...] = (
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-4-turbo",
    "gpt-4-turbo-preview",
    "gpt-4-0125-preview",
    "gpt-4-1106-preview",
    "gpt-4",
    "gpt-4.1",
    "gpt-4.1-mini",
    "gpt-4.1-nano",
    "gpt-3.5-turbo",
    "gpt-3.5-turbo-0125",
    "gpt-3.5-turbo-1106",
)


def resolve_model_info(model_id: str, tool_use_override: Optional[bool] = None) -> LLMModelInfo:
    """
    Build LLMModelInfo for a model id.

    Args:
        model_id: Model identifier
        tool_use_override: Forces the tool_use flag (from configuration);
            None means look the model up in TOOL_USE_MODELS

    Returns:
        LLMModelInfo; unknown models default to tool_use=False
    """
    if tool_use_override is not None:
        return LLMModelInfo(model_id=model_id, tool_use=tool_use_override)
    return LLMModelInfo(model_id=model_id, tool_use=model_id in TOOL_USE_MODELS)

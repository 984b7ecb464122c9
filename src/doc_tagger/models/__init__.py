"""
Pydantic data models for Document Tagger.

Includes:
- ChatMessage (system/user prompt messages)
- LLMModelInfo + resolve_model_info (tool-calling capability registry)
- TagResponse (existing + new tags returned by the model)
"""

from doc_tagger.models.llm_models import (
    TOOL_USE_MODELS,
    ChatMessage,
    LLMModelInfo,
    TagResponse,
    resolve_model_info,
)

__all__ = [
    "ChatMessage",
    "LLMModelInfo",
    "TagResponse",
    "TOOL_USE_MODELS",
    "resolve_model_info",
]

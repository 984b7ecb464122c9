"""
FastAPI dependency injection for Document Tagger.

Provides singleton instances of expensive resources (LLM client, prompt
builder, tag catalog) built from settings.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog

from doc_tagger.config import Settings, settings
from doc_tagger.llm.base_client import BaseLLMClient
from doc_tagger.llm.openai_client import OpenAIClient
from doc_tagger.llm.prompt_builder import PromptBuilder
from doc_tagger.tags.catalog import TagCatalog


logger = structlog.get_logger(__name__)


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_tag_catalog() -> TagCatalog:
    """
    Get singleton tag catalog.

    Source priority: TAGS_FILE, then TAGS_MARKDOWN_DIR, else empty.

    Raises:
        TagCatalogError: Configured source cannot be read
    """
    current = get_settings()
    if current.TAGS_FILE:
        return TagCatalog.from_file(current.TAGS_FILE)
    if current.TAGS_MARKDOWN_DIR:
        return TagCatalog.from_markdown_dir(current.TAGS_MARKDOWN_DIR)
    logger.warning("No tag source configured, using an empty catalog")
    return TagCatalog()


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.

    Loads Jinja2 templates once and reuses them across requests.
    """
    current = get_settings()
    templates_dir = Path(current.PROMPT_TEMPLATES_DIR) if current.PROMPT_TEMPLATES_DIR else None
    return PromptBuilder(templates_dir=templates_dir)


def create_llm_client(model_id: Optional[str] = None) -> OpenAIClient:
    """
    Build a tagging client from settings.

    Args:
        model_id: Override OPENAI_MODEL

    Raises:
        InvalidCredentialsError: OPENAI_API_KEY not set
    """
    current = get_settings()
    return OpenAIClient(
        model_id=model_id or current.OPENAI_MODEL,
        api_key=current.OPENAI_API_KEY,
        base_url=current.OPENAI_BASE_URL,
        tag_catalog=get_tag_catalog(),
        prompt_builder=get_prompt_builder(),
        temperature=current.LLM_TEMPERATURE,
        timeout_ms=current.LLM_TIMEOUT_MS,
        tool_use=current.LLM_TOOL_USE,
    )


@lru_cache()
def get_llm_client() -> BaseLLMClient:
    """
    Get singleton LLM client with connection pooling.

    Uses @lru_cache to ensure only one client instance is created.
    A failed creation (missing API key) is not cached.
    """
    return create_llm_client()

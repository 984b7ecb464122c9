"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import pytest
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx

from doc_tagger.config import Settings
from doc_tagger.llm.prompt_builder import PromptBuilder
from doc_tagger.tags.catalog import TagCatalog


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.OPENAI_BASE_URL = "http://localhost:8080/v1"
    """
    return Settings(
        APP_NAME="Document Tagger (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        OPENAI_API_KEY="sk-test",
        OPENAI_MODEL="gpt-4o-mini",
        OPENAI_BASE_URL=None,
        LLM_TEMPERATURE=0.0,
        LLM_TIMEOUT_MS=10000,
        LLM_TOOL_USE=None,
        TAGS_FILE=None,
        TAGS_MARKDOWN_DIR=None,
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_document(fixtures_dir: Path) -> str:
    """OSINT-style document text."""
    return (fixtures_dir / "sample_document.txt").read_text(encoding="utf-8")


@pytest.fixture
def tag_catalog() -> TagCatalog:
    """Small in-memory tag catalog."""
    return TagCatalog(["#networking", "#malware", "#threat-intel", "#cloud"])


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    """Prompt builder with the packaged templates."""
    return PromptBuilder()


def tool_call_completion(
    arguments: Any,
    name: str = "tag_document",
    usage: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    """Chat-completions body whose reply is a single function call."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [
                        {
                            "id": "call_1",
                            "type": "function",
                            "function": {"name": name, "arguments": arguments},
                        }
                    ],
                },
                "finish_reason": "stop",
            }
        ],
        "usage": usage or {"prompt_tokens": 120, "completion_tokens": 30, "total_tokens": 150},
    }


def text_completion(content: str) -> Dict[str, Any]:
    """Chat-completions body whose reply is plain text."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "custom-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def openai_error(message: str, code: Optional[str] = None, error_type: str = "invalid_request_error") -> Dict[str, Any]:
    """OpenAI-style error body."""
    return {"error": {"message": message, "type": error_type, "param": None, "code": code}}


@pytest.fixture
def make_completion_tool_call() -> Callable[..., Dict[str, Any]]:
    return tool_call_completion


@pytest.fixture
def make_text_completion() -> Callable[[str], Dict[str, Any]]:
    return text_completion


@pytest.fixture
def make_openai_error() -> Callable[..., Dict[str, Any]]:
    return openai_error


@pytest.fixture
def recording_transport():
    """Factory for an httpx.MockTransport that records requests.

    Usage:
        def test_something(recording_transport):
            transport, requests = recording_transport(200, body)
    """
    def _create(status_code: int = 200, body: Any = None, handler: Optional[Callable] = None):
        requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(status_code, json=body)

        return httpx.MockTransport(_handle), requests

    return _create

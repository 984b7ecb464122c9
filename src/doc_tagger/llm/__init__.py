"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for tagging clients
- OpenAIClient: Implementation for OpenAI / OpenAI-compatible endpoints
- PromptBuilder: Builds the system + user messages
- error_classifier: Maps vendor error messages onto TaggingError kinds
- output_parser: Tool-call and free-text reply parsers
- text_utils: Tag normalization and merging
- exceptions: Tagging error kinds
"""

from doc_tagger.llm.base_client import BaseLLMClient
from doc_tagger.llm.openai_client import OpenAIClient
from doc_tagger.llm.prompt_builder import PromptBuilder
from doc_tagger.llm.error_classifier import classify_error
from doc_tagger.llm.exceptions import (
    TaggingError,
    InvalidCredentialsError,
    RateLimitedError,
    QuotaExhaustedError,
    ServerFaultError,
    ServerOverloadedError,
    InputTooLargeError,
    BadEndpointError,
    UnreachableEndpointError,
    OutputParseError,
)

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "PromptBuilder",
    "classify_error",
    "TaggingError",
    "InvalidCredentialsError",
    "RateLimitedError",
    "QuotaExhaustedError",
    "ServerFaultError",
    "ServerOverloadedError",
    "InputTooLargeError",
    "BadEndpointError",
    "UnreachableEndpointError",
    "OutputParseError",
]

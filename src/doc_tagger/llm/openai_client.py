"""
OpenAI client implementation for document tagging.

Talks to the OpenAI chat-completions API (or any OpenAI-compatible
endpoint set as a custom base URL) using httpx AsyncClient. Supports:
- Forced tool calling (tag_document) for models that advertise it
- Free-text parsing for models that don't
- Failure classification into user-facing TaggingError kinds
"""

import time
from typing import TYPE_CHECKING, Any, Dict, Optional
import httpx
import structlog

from doc_tagger.llm.base_client import BaseLLMClient
from doc_tagger.llm.error_classifier import classify_error, missing_api_key_error
from doc_tagger.llm.exceptions import OutputParseError
from doc_tagger.llm.output_parser import parse_plain_response, parse_tool_call
from doc_tagger.llm.prompt_builder import PromptBuilder
from doc_tagger.llm.text_utils import format_output_tags
from doc_tagger.llm.tool import TAG_DOCUMENT_TOOL, TAG_DOCUMENT_TOOL_NAME, forced_tool_choice
from doc_tagger.models.llm_models import ChatMessage, TagResponse, resolve_model_info
from doc_tagger.monitoring.metrics import (
    llm_latency_seconds,
    llm_tokens_total,
    tagging_errors_total,
    tagging_requests_total,
    tags_returned_total,
)

if TYPE_CHECKING:
    from doc_tagger.tags.catalog import TagCatalog


logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _error_payload(response: httpx.Response) -> Dict[str, Any]:
    """
    The ``error`` object of an error response, or {} if there is none.

    OpenAI sends ``{"error": {...}}``; some compatible servers wrap that in
    a one-element list or send ``{"error": "text"}``.
    """
    try:
        body = response.json()
    except ValueError:
        return {}

    if isinstance(body, list) and len(body) == 1:
        body = body[0]
    if not isinstance(body, dict):
        return {}

    error = body.get("error")
    if isinstance(error, str):
        return {"message": error}
    return error if isinstance(error, dict) else {}


def describe_failure(exc: Exception) -> tuple[str, Optional[str], Dict[str, Any]]:
    """
    Reduce a failure to (message, error_code, details) for classification.

    Transport errors are given the wording the OpenAI SDKs use so that they
    hit the same classification rules; HTTP error bodies contribute the
    vendor's own ``error.message`` and ``error.code``.
    """
    details: Dict[str, Any] = {"error_type": type(exc).__name__}

    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        details["status"] = response.status_code
        error = _error_payload(response)

        code = error.get("code")
        message = error.get("message")
        if not isinstance(message, str) or not message:
            message = f"{response.status_code} {response.text}".strip()
        return message, str(code) if code else None, details

    if isinstance(exc, httpx.TimeoutException):
        details["error"] = str(exc)
        return "Request timed out.", None, details

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return f"Invalid URL: {exc}", None, details

    if isinstance(exc, httpx.TransportError):
        details["error"] = str(exc)
        return "Connection error.", None, details

    if isinstance(exc, OutputParseError):
        details.update(exc.details)
        return exc.message, None, details

    return str(exc), None, details


class OpenAIClient(BaseLLMClient):
    """
    OpenAI-specific tagging client using httpx for async HTTP communication.

    API Endpoints:
    - POST /chat/completions: tag a document
    - GET /models: health check

    One request per generate_tags() call, temperature 0.0 and a 10 second
    request timeout by default. No retries.
    """

    def __init__(
        self,
        model_id: str,
        api_key: str,
        base_url: Optional[str] = None,
        *,
        tag_catalog: "TagCatalog",
        prompt_builder: Optional[PromptBuilder] = None,
        temperature: float = 0.0,
        timeout_ms: int = 10000,
        tool_use: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize OpenAI client.

        Args:
            model_id: Model identifier (e.g., "gpt-4o-mini")
            api_key: OpenAI API key
            base_url: Custom OpenAI-compatible endpoint, None for api.openai.com
            tag_catalog: Existing tags shown to the model
            prompt_builder: Prompt builder (default: packaged templates)
            temperature: Sampling temperature
            timeout_ms: Request timeout in milliseconds
            tool_use: Force the tool-calling flag; None looks the model up
            transport: httpx transport override (tests, proxies)

        Raises:
            InvalidCredentialsError: No API key given
        """
        if not api_key:
            logger.error("Error while instantiating model", error="API key not found")
            raise missing_api_key_error()

        super().__init__(resolve_model_info(model_id, tool_use), api_key)

        self.base_url = base_url or None
        self.tag_catalog = tag_catalog
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.temperature = temperature
        self.timeout = timeout_ms / 1000.0

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "OpenAI client initialized",
            endpoint=self.endpoint_url,
            custom_base_url=self.base_url is not None,
            timeout=self.timeout,
            temperature=temperature,
        )

    @property
    def endpoint_url(self) -> str:
        return (self.base_url or DEFAULT_BASE_URL).rstrip("/")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.endpoint_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def build_payload(self, messages: list[ChatMessage]) -> Dict[str, Any]:
        """
        Build the chat-completions request body.

        With tool use the tag_document function is the only tool and the
        model is forced to call it.
        """
        payload: Dict[str, Any] = {
            "model": self.model_info.model_id,
            "messages": [m.model_dump() for m in messages],
            "temperature": self.temperature,
        }
        if self.model_info.tool_use:
            payload["tools"] = [TAG_DOCUMENT_TOOL]
            payload["tool_choice"] = forced_tool_choice(TAG_DOCUMENT_TOOL_NAME)
        return payload

    def parse_completion(self, data: Dict[str, Any]) -> TagResponse:
        """
        Extract tag lists from a chat-completions response body.

        Raises:
            OutputParseError: No choices, no tool call, or unparseable content
        """
        choices = data.get("choices") or []
        if not choices:
            raise OutputParseError("Completion response has no choices", details={"response": data})
        message = choices[0].get("message") or {}

        if self.model_info.tool_use:
            return parse_tool_call(message, key_name=TAG_DOCUMENT_TOOL_NAME)
        return parse_plain_response(message.get("content"))

    def _record_usage(self, data: Dict[str, Any]) -> None:
        usage = data.get("usage") or {}
        prompt_tokens = usage.get("prompt_tokens")
        completion_tokens = usage.get("completion_tokens")
        if prompt_tokens:
            llm_tokens_total.labels(model=self.model_name, token_type="prompt").inc(prompt_tokens)
        if completion_tokens:
            llm_tokens_total.labels(model=self.model_name, token_type="completion").inc(completion_tokens)

    async def generate_tags(self, document_text: str) -> list[str]:
        """
        Tag a document using the chat-completions API.

        POST /chat/completions with payload:
        {
            "model": "gpt-4o-mini",
            "messages": [{"role": "system", ...}, {"role": "user", ...}],
            "temperature": 0.0,
            "tools": [<tag_document>],                      # tool use only
            "tool_choice": {"type": "function", ...}        # tool use only
        }

        Returns:
            Merged list of existing + new tags

        Raises:
            TaggingError: Classified failure (see error_classifier)
        """
        start_time = time.perf_counter()

        messages = self.prompt_builder.build_messages(
            tags_string=self.tag_catalog.get_tags_string(),
            document=document_text,
            tool_use=self.model_info.tool_use,
        )
        payload = self.build_payload(messages)

        logger.info(
            "Sending tagging request",
            model=self.model_name,
            document_length=len(document_text),
            catalog_size=len(self.tag_catalog),
            tool_use=self.model_info.tool_use,
        )

        try:
            client = await self._get_client()
            response = await client.post("/chat/completions", json=payload)
            response.raise_for_status()
            data = response.json()

            logger.debug("LLM Response", response=data)

            tag_response = self.parse_completion(data)
        except Exception as e:
            latency = time.perf_counter() - start_time
            message, error_code, details = describe_failure(e)

            logger.error(
                "Error while invoking completion",
                error=message,
                error_code=error_code,
                model=self.model_name,
                details=details,
            )

            error = classify_error(
                message,
                base_url=self.base_url,
                model_id=self.model_name,
                error_code=error_code,
                details=details,
            )

            llm_latency_seconds.labels(model=self.model_name, success="false").observe(latency)
            tagging_requests_total.labels(model=self.model_name, success="false").inc()
            tagging_errors_total.labels(kind=error.kind).inc()
            raise error from e

        latency = time.perf_counter() - start_time
        self._record_usage(data)

        tags = format_output_tags(tag_response.tags, tag_response.new_tags)

        llm_latency_seconds.labels(model=self.model_name, success="true").observe(latency)
        tagging_requests_total.labels(model=self.model_name, success="true").inc()
        tags_returned_total.labels(origin="existing").inc(len(tag_response.tags))
        tags_returned_total.labels(origin="new").inc(len(tag_response.new_tags))

        logger.info(
            "Tagging successful",
            model=self.model_name,
            latency_ms=int(latency * 1000),
            tag_count=len(tags),
            existing_count=len(tag_response.tags),
            new_count=len(tag_response.new_tags),
        )
        return tags

    async def health_check(self) -> bool:
        """
        Check the endpoint via GET /models.

        Returns True if the endpoint answers 200 for this API key.
        """
        try:
            client = await self._get_client()
            response = await client.get("/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Completion endpoint health check passed")
            return True
        except Exception as e:
            logger.warning("Completion endpoint health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed OpenAI client connection")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

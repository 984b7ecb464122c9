"""
Map completion-API failures onto user-facing tagging errors.

OpenAI reports most failures only as prose, so classification is a lookup
over an ordered substring table: the first rule whose substring occurs in
the error message wins, and anything unmatched becomes the generic
TaggingError. When the endpoint also returns a structured error code it is
checked before the text.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from doc_tagger.llm.exceptions import (
    GENERIC_FAILURE_MESSAGE,
    BadEndpointError,
    InputTooLargeError,
    InvalidCredentialsError,
    QuotaExhaustedError,
    RateLimitedError,
    ServerFaultError,
    ServerOverloadedError,
    TaggingError,
    UnreachableEndpointError,
)


logger = structlog.get_logger(__name__)


# Model families for which "Connection error" points at the custom base URL
CUSTOM_ENDPOINT_MODEL_FAMILIES: tuple[str, ...] = ("gpt-4", "gpt-3.5-turbo")

MISSING_API_KEY_MESSAGE = "Incorrect OpenAI API key. Please check your API key."


@dataclass(frozen=True)
class ErrorRule:
    """One row of the classification table."""
    substring: str
    error_class: type[TaggingError]
    message: str
    requires_custom_endpoint: bool = False


ERROR_RULES: tuple[ErrorRule, ...] = (
    ErrorRule(
        "Incorrect API key",
        InvalidCredentialsError,
        "Incorrect API key. Please check your API key.",
    ),
    ErrorRule(
        "Rate limit reached for requests",
        RateLimitedError,
        "You are sending requests too quickly. "
        "Please pace your requests or read OpenAI's Rate limit guide.",
    ),
    ErrorRule(
        "You exceeded your current quota",
        QuotaExhaustedError,
        "You have run out of OpenAI credits or hit your maximum monthly spend.",
    ),
    ErrorRule(
        "The server had an error while processing your request",
        ServerFaultError,
        "Issue on OpenAI's servers. Please retry your request after a brief wait.",
    ),
    ErrorRule(
        "The engine is currently overloaded",
        ServerOverloadedError,
        "OpenAI's servers are experiencing high traffic. "
        "Please retry your requests after a brief wait.",
    ),
    ErrorRule(
        "Please reduce the length",
        InputTooLargeError,
        "Your document is too long. Please reduce the length of your document.",
    ),
    ErrorRule(
        "Invalid URL",
        BadEndpointError,
        "Invalid custom base URL provided. Please check your custom base URL.",
    ),
    ErrorRule(
        "Connection error",
        UnreachableEndpointError,
        "Could not connect to custom base URL provided. Please check your custom base URL.",
        requires_custom_endpoint=True,
    ),
)

# OpenAI error codes -> substring of the rule they correspond to
ERROR_CODE_RULES: dict[str, str] = {
    "invalid_api_key": "Incorrect API key",
    "rate_limit_exceeded": "Rate limit reached for requests",
    "insufficient_quota": "You exceeded your current quota",
    "server_error": "The server had an error while processing your request",
    "engine_overloaded": "The engine is currently overloaded",
    "context_length_exceeded": "Please reduce the length",
}

_RULES_BY_SUBSTRING = {rule.substring: rule for rule in ERROR_RULES}


def uses_custom_endpoint(base_url: Optional[str], model_id: str) -> bool:
    """True if a custom base URL is set for a model family it applies to."""
    if base_url is None:
        return False
    return any(family in model_id for family in CUSTOM_ENDPOINT_MODEL_FAMILIES)


def _rule_applies(rule: ErrorRule, base_url: Optional[str], model_id: str) -> bool:
    if rule.requires_custom_endpoint:
        return uses_custom_endpoint(base_url, model_id)
    return True


def find_rule(
    message: str,
    *,
    base_url: Optional[str] = None,
    model_id: str = "",
    error_code: Optional[str] = None,
) -> Optional[ErrorRule]:
    """
    Find the first matching classification rule.

    Args:
        message: Raw error message from the completion call
        base_url: Custom base URL, None when the default endpoint is used
        model_id: Model identifier of the failed call
        error_code: Structured error code from the response body, if any

    Returns:
        Matching ErrorRule, or None for the generic category
    """
    if error_code and error_code in ERROR_CODE_RULES:
        return _RULES_BY_SUBSTRING[ERROR_CODE_RULES[error_code]]

    for rule in ERROR_RULES:
        if rule.substring in message and _rule_applies(rule, base_url, model_id):
            return rule
    return None


def classify_error(
    message: str,
    *,
    base_url: Optional[str] = None,
    model_id: str = "",
    error_code: Optional[str] = None,
    details: Optional[dict] = None,
) -> TaggingError:
    """
    Turn a raw error message into the TaggingError to raise.

    Returns the exception instead of raising it so callers can chain it
    with ``raise ... from``.

    Examples:
        >>> classify_error("Rate limit reached for requests").message
        "You are sending requests too quickly. Please pace your requests or read OpenAI's Rate limit guide."
        >>> classify_error("Some unrelated vendor text").message
        'Error while generating tags.'
    """
    error_details = {"raw_message": message, **(details or {})}
    if error_code:
        error_details["error_code"] = error_code

    rule = find_rule(message, base_url=base_url, model_id=model_id, error_code=error_code)
    if rule is None:
        logger.error("Error while generating tags", error=message, error_code=error_code)
        return TaggingError(GENERIC_FAILURE_MESSAGE, details=error_details)

    error = rule.error_class(rule.message, details=error_details)
    logger.debug("Classified tagging error", kind=error.kind, matched=rule.substring)
    return error


def missing_api_key_error() -> InvalidCredentialsError:
    """Error raised when a client is created without an API key."""
    return InvalidCredentialsError(MISSING_API_KEY_MESSAGE, details={"reason": "api_key_not_found"})

"""Unit tests for error classification."""

import pytest

from doc_tagger.llm.error_classifier import (
    ERROR_RULES,
    classify_error,
    find_rule,
    missing_api_key_error,
    uses_custom_endpoint,
)
from doc_tagger.llm.exceptions import (
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


CUSTOM_URL = "http://localhost:8080/v1"


class TestSubstringTable:
    """Each vendor message maps to its error kind."""

    @pytest.mark.parametrize(
        "vendor_message, error_class, expected_fragment",
        [
            (
                "Incorrect API key provided: sk-abc***. You can find your API key at https://platform.openai.com/account/api-keys.",
                InvalidCredentialsError,
                "check your API key",
            ),
            (
                "Rate limit reached for requests in organization org-xyz on requests per min.",
                RateLimitedError,
                "pace your requests",
            ),
            (
                "You exceeded your current quota, please check your plan and billing details.",
                QuotaExhaustedError,
                "run out of OpenAI credits",
            ),
            (
                "The server had an error while processing your request. Sorry about that!",
                ServerFaultError,
                "retry your request after a brief wait",
            ),
            (
                "The engine is currently overloaded, please try again later",
                ServerOverloadedError,
                "retry your requests after a brief wait",
            ),
            (
                "This model's maximum context length is 8192 tokens. Please reduce the length of the messages.",
                InputTooLargeError,
                "document is too long",
            ),
            (
                "Invalid URL: Request URL is missing an 'http://' or 'https://' protocol.",
                BadEndpointError,
                "check your custom base URL",
            ),
        ],
    )
    def test_substring_maps_to_kind(self, vendor_message, error_class, expected_fragment):
        """Should raise the kind matching the substring, with a user message."""
        error = classify_error(vendor_message, model_id="gpt-4o-mini")

        assert type(error) is error_class
        assert expected_fragment in error.message
        assert error.details["raw_message"] == vendor_message

    def test_every_rule_is_reachable(self):
        """Every rule fires for a message that is exactly its substring."""
        for rule in ERROR_RULES:
            error = classify_error(rule.substring, base_url=CUSTOM_URL, model_id="gpt-4")
            assert isinstance(error, rule.error_class)
            assert error.message == rule.message

    def test_rate_limit_example(self):
        error = classify_error("Rate limit reached for requests")
        assert isinstance(error, RateLimitedError)
        assert error.kind == "rate_limited"
        assert "pace your requests" in error.message

    def test_unmatched_message_is_generic(self):
        """Should fall through to the generic category."""
        error = classify_error("Some unrelated vendor text")

        assert type(error) is TaggingError
        assert error.kind == "generic_failure"
        assert error.message == "Error while generating tags."

    def test_first_match_wins(self):
        """A message carrying two substrings takes the earlier rule."""
        message = "Rate limit reached for requests. You exceeded your current quota."
        assert isinstance(classify_error(message), RateLimitedError)

    def test_overloaded_is_a_server_fault(self):
        error = classify_error("The engine is currently overloaded, please try again later")
        assert isinstance(error, ServerFaultError)
        assert error.kind == "server_overloaded"

    def test_match_is_case_sensitive(self):
        """Vendor wording is matched exactly."""
        assert type(classify_error("rate limit reached for requests")) is TaggingError


class TestConnectionError:
    """'Connection error' only points at the custom URL for some models."""

    @pytest.mark.parametrize("model_id", ["gpt-4", "gpt-4o-mini", "gpt-4-turbo", "gpt-3.5-turbo"])
    def test_custom_url_with_known_family(self, model_id):
        error = classify_error("Connection error.", base_url=CUSTOM_URL, model_id=model_id)

        assert isinstance(error, UnreachableEndpointError)
        assert error.message == (
            "Could not connect to custom base URL provided. Please check your custom base URL."
        )

    def test_default_endpoint_is_generic(self):
        error = classify_error("Connection error.", base_url=None, model_id="gpt-4")
        assert type(error) is TaggingError

    def test_other_model_family_is_generic(self):
        error = classify_error("Connection error.", base_url=CUSTOM_URL, model_id="llama3.1:8b")
        assert type(error) is TaggingError

    def test_uses_custom_endpoint(self):
        assert uses_custom_endpoint(CUSTOM_URL, "gpt-3.5-turbo-0125")
        assert not uses_custom_endpoint(None, "gpt-3.5-turbo")
        assert not uses_custom_endpoint(CUSTOM_URL, "mistral-large")


class TestErrorCodes:
    """Structured error codes are checked before the message text."""

    @pytest.mark.parametrize(
        "code, error_class",
        [
            ("invalid_api_key", InvalidCredentialsError),
            ("rate_limit_exceeded", RateLimitedError),
            ("insufficient_quota", QuotaExhaustedError),
            ("server_error", ServerFaultError),
            ("engine_overloaded", ServerOverloadedError),
            ("context_length_exceeded", InputTooLargeError),
        ],
    )
    def test_code_maps_to_kind(self, code, error_class):
        error = classify_error("reworded vendor message", error_code=code)

        assert type(error) is error_class
        assert error.details["error_code"] == code

    def test_code_wins_over_text(self):
        """429 quota errors reworded to look like rate limits still classify by code."""
        error = classify_error("Rate limit reached for requests", error_code="insufficient_quota")
        assert isinstance(error, QuotaExhaustedError)

    def test_unknown_code_falls_back_to_text(self):
        error = classify_error("Incorrect API key provided", error_code="some_new_code")
        assert isinstance(error, InvalidCredentialsError)

    def test_find_rule_returns_none_for_generic(self):
        assert find_rule("nothing to see", error_code=None) is None


def test_missing_api_key_error():
    """Client construction without a key reports invalid credentials."""
    error = missing_api_key_error()

    assert isinstance(error, InvalidCredentialsError)
    assert error.message == "Incorrect OpenAI API key. Please check your API key."
    assert error.details["reason"] == "api_key_not_found"


def test_extra_details_are_kept():
    error = classify_error("Some unrelated vendor text", details={"status": 418})
    assert error.details == {"raw_message": "Some unrelated vendor text", "status": 418}

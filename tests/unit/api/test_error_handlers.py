"""
Unit tests for API exception handlers.
"""

import json

import pytest
from fastapi.exceptions import RequestValidationError

from doc_tagger.api.error_handlers import (
    EXCEPTION_HANDLERS,
    STATUS_BY_KIND,
    generic_error_handler,
    request_validation_error_handler,
    tag_catalog_error_handler,
    tagging_error_handler,
)
from doc_tagger.llm import exceptions
from doc_tagger.llm.exceptions import BadEndpointError, TaggingError
from doc_tagger.tags.catalog import TagCatalogError


def _body(response):
    return json.loads(response.body)


def test_every_error_kind_has_a_status():
    kinds = {
        cls.kind
        for cls in vars(exceptions).values()
        if isinstance(cls, type) and issubclass(cls, TaggingError)
    }
    assert kinds == set(STATUS_BY_KIND)


@pytest.mark.asyncio
async def test_tagging_error_handler():
    error = BadEndpointError(
        "Invalid custom base URL provided. Please check your custom base URL.",
        details={"raw_message": "Invalid URL: localhost"},
    )

    response = await tagging_error_handler(None, error)

    assert response.status_code == 502
    body = _body(response)
    assert body["error"] == "bad_endpoint"
    assert body["message"] == error.message
    assert "details" not in body
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_tag_catalog_error_handler():
    response = await tag_catalog_error_handler(None, TagCatalogError("Tags directory not found: notes"))

    assert response.status_code == 500
    assert _body(response)["error"] == "tag_catalog_unavailable"


@pytest.mark.asyncio
async def test_request_validation_error_handler():
    error = RequestValidationError(
        [{"loc": ("body", "document"), "msg": "Field required", "type": "missing"}]
    )

    response = await request_validation_error_handler(None, error)

    assert response.status_code == 400
    body = _body(response)
    assert body["error"] == "invalid_request"
    assert body["details"] == [{"loc": ["body", "document"], "msg": "Field required", "type": "missing"}]


@pytest.mark.asyncio
async def test_generic_error_handler():
    response = await generic_error_handler(None, RuntimeError("boom"))

    assert response.status_code == 500
    body = _body(response)
    assert body["error"] == "internal_error"
    assert "boom" not in body["message"]


def test_handler_registry():
    assert EXCEPTION_HANDLERS[TaggingError] is tagging_error_handler
    assert EXCEPTION_HANDLERS[Exception] is generic_error_handler

"""Unit tests for the tag_document tool declaration."""

from jsonschema import Draft7Validator

from doc_tagger.llm.tool import (
    TAG_DOCUMENT_PARAMETERS,
    TAG_DOCUMENT_TOOL,
    TAG_DOCUMENT_TOOL_NAME,
    forced_tool_choice,
)


def test_tool_declaration_shape():
    assert TAG_DOCUMENT_TOOL["type"] == "function"
    assert TAG_DOCUMENT_TOOL["function"]["name"] == TAG_DOCUMENT_TOOL_NAME == "tag_document"
    assert TAG_DOCUMENT_TOOL["function"]["parameters"] is TAG_DOCUMENT_PARAMETERS


def test_parameters_are_a_valid_schema():
    Draft7Validator.check_schema(TAG_DOCUMENT_PARAMETERS)
    assert set(TAG_DOCUMENT_PARAMETERS["required"]) == {"tags", "newTags"}


def test_forced_tool_choice():
    assert forced_tool_choice() == {"type": "function", "function": {"name": "tag_document"}}

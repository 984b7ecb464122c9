"""
Parsers for completion replies.

Two paths, picked by the model's tool-calling capability:
- parse_tool_call: key-scoped extractor for forced function calls
  (arguments of the first call to the named function, schema-checked)
- parse_plain_response: free-text reply, either a JSON object with
  tags/newTags or a prose list of #tags
"""

import json
import re
from typing import Any, Dict, Optional

import structlog
from jsonschema import Draft7Validator

from doc_tagger.llm.exceptions import OutputParseError
from doc_tagger.llm.tool import TAG_DOCUMENT_PARAMETERS, TAG_DOCUMENT_TOOL_NAME
from doc_tagger.models.llm_models import TagResponse


logger = structlog.get_logger(__name__)

_ARGUMENTS_VALIDATOR = Draft7Validator(TAG_DOCUMENT_PARAMETERS)

# "#" not preceded by a word char and not made of digits only (#networking, #ai/llm, #2024-report,
# #node.js, #c++); a trailing "." is sentence punctuation, not part of the tag
HASHTAG_PATTERN = re.compile(r"(?<![\w#&])#(?!\d+(?![\w/-]))\w[\w/+-]*(?:\.[\w/+-]+)*")

_FENCED_JSON_PATTERN = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


def _load_json_object(content: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise OutputParseError(
            f"Failed to parse tool arguments as JSON: {e.msg}",
            details={"content_snippet": content[:500], "parse_error": f"{e.msg} at line {e.lineno} col {e.colno}"},
        ) from e

    if not isinstance(parsed, dict):
        raise OutputParseError(
            f"Tool arguments are not a JSON object (got {type(parsed).__name__})",
            details={"content_snippet": content[:500]},
        )
    return parsed


def parse_tool_call(message: Dict[str, Any], key_name: str = TAG_DOCUMENT_TOOL_NAME) -> TagResponse:
    """
    Extract the arguments of a forced function call.

    Args:
        message: Assistant message from the chat-completion response
            (``choices[0].message``)
        key_name: Function name whose call to extract

    Returns:
        TagResponse built from the call arguments

    Raises:
        OutputParseError: No call to key_name, malformed JSON arguments,
            or arguments not matching the tool schema
    """
    tool_calls = message.get("tool_calls") or []
    call = next(
        (c for c in tool_calls if (c.get("function") or {}).get("name") == key_name),
        None,
    )
    if call is None:
        raise OutputParseError(
            f"Model response contains no call to '{key_name}'",
            details={"tool_calls": [(c.get("function") or {}).get("name") for c in tool_calls]},
        )

    arguments = call["function"].get("arguments") or ""
    if isinstance(arguments, str):
        arguments = _load_json_object(arguments)

    errors = sorted(_ARGUMENTS_VALIDATOR.iter_errors(arguments), key=lambda e: list(e.path))
    if errors:
        raise OutputParseError(
            f"Tool arguments do not match the '{key_name}' schema",
            details={"validation_errors": [e.message for e in errors[:10]]},
        )

    logger.debug("Parsed tool call", tool=key_name, arguments=arguments)
    return TagResponse.model_validate(arguments)


def _find_json_object(content: str) -> Optional[Dict[str, Any]]:
    candidates = [m.group(1) for m in _FENCED_JSON_PATTERN.finditer(content)]
    start, end = content.find("{"), content.rfind("}")
    if start != -1 and end > start:
        candidates.append(content[start:end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict) and ("tags" in parsed or "newTags" in parsed):
            return parsed
    return None


def extract_hashtags(text: str) -> list[str]:
    """Return every #tag token in text, in order of appearance."""
    return HASHTAG_PATTERN.findall(text)


def parse_plain_response(content: Optional[str]) -> TagResponse:
    """
    Parse a free-text reply from a model without tool calling.

    Prefers a JSON object carrying ``tags``/``newTags`` (bare or inside a
    code fence). Otherwise every #tag in the text is returned as an
    existing tag.

    Raises:
        OutputParseError: Empty reply
    """
    if not content or not content.strip():
        raise OutputParseError("Model response content is empty or whitespace-only")

    parsed = _find_json_object(content)
    if parsed is not None:
        tags = parsed.get("tags") or []
        new_tags = parsed.get("newTags") or []
        if isinstance(tags, list) and isinstance(new_tags, list):
            return TagResponse(
                tags=[str(t) for t in tags],
                newTags=[str(t) for t in new_tags],
            )

    hashtags = extract_hashtags(content)
    logger.debug("Parsed plain response", hashtag_count=len(hashtags))
    return TagResponse(tags=hashtags, newTags=[])

"""
Function declaration used to force structured tag output.

Sent as the only entry of ``tools`` with a ``tool_choice`` naming it, so a
tool-capable model must answer with a ``tag_document`` call whose arguments
follow TAG_DOCUMENT_PARAMETERS.
"""

from typing import Any, Dict


TAG_DOCUMENT_TOOL_NAME = "tag_document"

TAG_DOCUMENT_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "tags": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Existing tags that describe the document. Each tag starts with '#'.",
        },
        "newTags": {
            "type": "array",
            "items": {"type": "string"},
            "description": "New tags you came up with for the document. Each tag starts with '#'.",
        },
    },
    "required": ["tags", "newTags"],
}

TAG_DOCUMENT_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": TAG_DOCUMENT_TOOL_NAME,
        "description": "Tag the document based on its content, using existing tags and new tags.",
        "parameters": TAG_DOCUMENT_PARAMETERS,
    },
}


def forced_tool_choice(name: str = TAG_DOCUMENT_TOOL_NAME) -> Dict[str, Any]:
    """tool_choice value that forces a call to the named function."""
    return {"type": "function", "function": {"name": name}}

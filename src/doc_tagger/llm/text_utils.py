"""
Text processing utilities for tags.

Normalizes the tag strings the model returns and merges the existing and
new tag lists into the single flat list handed back to callers.
"""

import re
from typing import Iterable, Optional


TAG_MARKER = "#"

_WHITESPACE = re.compile(r"\s+")


def normalize_tag(tag: str) -> Optional[str]:
    """
    Normalize one tag string.

    Strips surrounding whitespace, joins inner whitespace with '-', and
    makes sure the tag starts with a single '#'.

    Args:
        tag: Raw tag as returned by the model

    Returns:
        Normalized tag, or None if nothing is left after stripping

    Examples:
        >>> normalize_tag("networking")
        '#networking'
        >>> normalize_tag("  #threat intel ")
        '#threat-intel'
        >>> normalize_tag("#") is None
        True
    """
    body = tag.strip().lstrip(TAG_MARKER).strip()
    if not body:
        return None
    return TAG_MARKER + _WHITESPACE.sub("-", body)


def format_output_tags(
    tags: Optional[Iterable[str]],
    new_tags: Optional[Iterable[str]],
) -> list[str]:
    """
    Merge existing and new tags into one flat list.

    Existing tags come first, then new ones. Tags are normalized with
    normalize_tag(); empties are dropped and duplicates (after
    normalization) keep their first position.

    Args:
        tags: Existing catalog tags chosen by the model (may be None)
        new_tags: Tags the model proposed itself (may be None)

    Returns:
        Flat list of unique '#'-prefixed tags
    """
    merged: list[str] = []
    seen: set[str] = set()
    for raw in [*(tags or []), *(new_tags or [])]:
        tag = normalize_tag(raw)
        if tag is None or tag in seen:
            continue
        seen.add(tag)
        merged.append(tag)
    return merged

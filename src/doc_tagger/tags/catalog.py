"""
Tag catalog: the existing tags shown to the model before it tags a document.

Tags can come from a plain list, a tags file (one per line or a JSON list)
or a directory of markdown notes whose inline #tags and front-matter
``tags:`` entries are collected.
"""

import json
import re
from pathlib import Path
from typing import Iterable, Union

import structlog

from doc_tagger.llm.output_parser import extract_hashtags
from doc_tagger.llm.text_utils import normalize_tag


logger = structlog.get_logger(__name__)

_FRONT_MATTER = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)
_FRONT_MATTER_TAGS = re.compile(r"^tags:[ \t]*(.*)$", re.MULTILINE)
_FRONT_MATTER_LIST_ITEM = re.compile(r"^[ \t]*-[ \t]+(.+)$")
_FENCED_CODE = re.compile(r"```.*?```", re.DOTALL)


class TagCatalogError(Exception):
    """Raised when a tag source cannot be read."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TagCatalog:
    """
    Ordered, de-duplicated set of '#'-prefixed tags.

    Tags are normalized on the way in (see normalize_tag), so "networking",
    "#networking" and " #networking " are the same entry.
    """

    def __init__(self, tags: Iterable[str] = ()):
        self._tags: dict[str, None] = {}
        self.add(tags)

    def add(self, tags: Iterable[str]) -> None:
        """Add tags, ignoring empties and duplicates."""
        for raw in tags:
            tag = normalize_tag(raw)
            if tag is not None:
                self._tags.setdefault(tag, None)

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    def get_tags_string(self) -> str:
        """Catalog as a single block: sorted tags, one per line."""
        return "\n".join(sorted(self._tags, key=str.lower))

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and normalize_tag(tag) in self._tags

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tags={len(self)})"

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TagCatalog":
        """
        Load tags from a file.

        ``*.json`` files must hold a list of strings; any other file is read
        as one tag per line (blank lines ignored).

        Raises:
            TagCatalogError: File missing, unreadable or malformed JSON
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TagCatalogError(
                f"Cannot read tags file: {path}",
                details={"path": str(path), "error": str(e)},
            ) from e

        if path.suffix.lower() == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise TagCatalogError(
                    f"Tags file is not valid JSON: {e.msg}",
                    details={"path": str(path)},
                ) from e
            if not isinstance(data, list) or not all(isinstance(t, str) for t in data):
                raise TagCatalogError(
                    "Tags JSON file must contain a list of strings",
                    details={"path": str(path)},
                )
            tags = data
        else:
            tags = [line for line in text.splitlines() if line.strip()]

        catalog = cls(tags)
        logger.info("Loaded tag catalog from file", path=str(path), tag_count=len(catalog))
        return catalog

    @classmethod
    def from_markdown_dir(cls, directory: Union[str, Path]) -> "TagCatalog":
        """
        Collect tags used across markdown notes.

        Scans ``*.md`` files recursively for inline #tags (outside fenced
        code blocks) and front-matter ``tags:`` entries.

        Raises:
            TagCatalogError: Directory missing
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise TagCatalogError(
                f"Tags directory not found: {directory}",
                details={"path": str(directory)},
            )

        catalog = cls()
        files = sorted(directory.rglob("*.md"))
        for note in files:
            try:
                text = note.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable note", path=str(note), error=str(e))
                continue
            catalog.add(tags_in_markdown(text))

        logger.info(
            "Loaded tag catalog from markdown notes",
            path=str(directory),
            file_count=len(files),
            tag_count=len(catalog),
        )
        return catalog


def _front_matter_tags(front_matter: str) -> list[str]:
    tags: list[str] = []
    lines = front_matter.splitlines()
    for index, line in enumerate(lines):
        match = _FRONT_MATTER_TAGS.match(line)
        if not match:
            continue
        inline = match.group(1).strip()
        if inline:
            # tags: [a, b]  or  tags: a, b
            tags.extend(t.strip().strip("'\"") for t in inline.strip("[]").split(","))
            continue
        # tags:
        #   - a
        for item in lines[index + 1:]:
            item_match = _FRONT_MATTER_LIST_ITEM.match(item)
            if not item_match:
                break
            tags.append(item_match.group(1).strip().strip("'\""))
    return tags


def tags_in_markdown(text: str) -> list[str]:
    """Return front-matter tags followed by inline #tags of a markdown note."""
    tags: list[str] = []
    body = text
    front_matter = _FRONT_MATTER.match(text)
    if front_matter:
        tags.extend(_front_matter_tags(front_matter.group(1)))
        body = text[front_matter.end():]

    tags.extend(extract_hashtags(_FENCED_CODE.sub("", body)))
    return tags

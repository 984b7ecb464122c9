"""
Tag catalog sources.

- TagCatalog: existing tags shown to the model (list, tags file, markdown notes)
- TagCatalogError: a tag source could not be read
"""

from doc_tagger.tags.catalog import TagCatalog, TagCatalogError, tags_in_markdown

__all__ = [
    "TagCatalog",
    "TagCatalogError",
    "tags_in_markdown",
]

"""
Test fixtures for Document Tagger.

Contains sample data for testing:
- sample_tags.txt: Tag catalog, one tag per line
- sample_tags.json: Same catalog as a JSON list
- sample_document.txt: OSINT-style document to tag
- notes/: Markdown notes with inline and front-matter tags
"""

"""
Unit tests for Document Tagger.

Test individual components in isolation:
- Prompt builder (catalog/document embedding)
- Error classifier (substring table, error codes, custom endpoint rule)
- Output parsers (tool calls, free text)
- OpenAI client (tool-use and plain paths against a mock transport)
- Tag catalog sources
"""

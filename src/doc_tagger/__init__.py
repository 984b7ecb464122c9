"""
Document Tagger.

Sends document text to a hosted LLM chat-completion endpoint and turns the
reply into a flat list of categorical tags:
- Prompt built from the existing tag catalog + the document
- Structured output via forced tool calling when the model supports it
- Vendor error messages classified into user-facing error kinds

Architecture: FastAPI service + OpenAI-compatible completion API over httpx
"""

__version__ = "0.1.0"

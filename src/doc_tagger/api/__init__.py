"""
FastAPI API routes and endpoints.

- routes_sync.py: POST /tags, GET /health, GET /tool-schema, GET /version
- dependencies.py: Dependency injection for LLM client, prompt builder, tag catalog
- models.py: API-specific request/response models
- error_handlers.py: Tagging error kinds -> HTTP status codes
- middleware.py: Request id tracing
"""

from doc_tagger.api import dependencies, error_handlers, models
from doc_tagger.api.routes_sync import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]

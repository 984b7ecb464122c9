"""Monitoring and metrics instrumentation for Document Tagger.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from doc_tagger.monitoring.metrics import (
    llm_latency_seconds,
    llm_tokens_total,
    tagging_errors_total,
    tagging_requests_total,
    tags_returned_total,
)

__all__ = [
    "tagging_requests_total",
    "tagging_errors_total",
    "tags_returned_total",
    "llm_latency_seconds",
    "llm_tokens_total",
]

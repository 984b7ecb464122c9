"""Custom Prometheus metrics for Document Tagger.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- tagging_errors_total (invalid_credentials / quota_exhausted need a human)
- llm_latency_seconds (p95 close to the 10s request timeout)
"""

from prometheus_client import Counter, Histogram

# === Tagging Metrics ===

tagging_requests_total = Counter(
    "tagging_requests_total",
    "Total tagging calls by model and outcome",
    ["model", "success"],
)
"""
Tagging calls counter.

Labels:
- model: Model identifier (e.g., gpt-4o-mini)
- success: true (tags returned), false (classified error raised)
"""

tagging_errors_total = Counter(
    "tagging_errors_total",
    "Total classified tagging errors by kind",
    ["kind"],
)
"""
Classified errors counter.

Labels:
- kind: invalid_credentials, rate_limited, quota_exhausted, server_fault,
  server_overloaded, input_too_large, bad_endpoint, unreachable_endpoint,
  generic_failure

Alert thresholds:
- WARN: any invalid_credentials or quota_exhausted
- WARN: rate_limited > 5% of requests
"""

tags_returned_total = Counter(
    "tags_returned_total",
    "Total tags returned by origin",
    ["origin"],
)
"""
Tags returned counter.

Labels:
- origin: existing (from the catalog), new (proposed by the model)

A rising share of new tags means the catalog no longer covers the documents.
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "Completion request latency in seconds",
    ["model", "success"],
    buckets=[0.25, 0.5, 1.0, 2.0, 3.0, 5.0, 7.5, 10.0],
)
"""
Completion latency histogram.

Buckets stop at the 10s request timeout.
"""

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens consumed by model and type",
    ["model", "token_type"],
)
"""
Token consumption counter.

Labels:
- model: Model name
- token_type: prompt (input tokens), completion (output tokens)

Used for cost estimation.
"""

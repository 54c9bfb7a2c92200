"""
Prometheus metrics registration and helpers.

Exports:
- observe_request(...): record HTTP request metrics
- observe_external_call(...): record speech/categorizer/Google calls
- metrics_latest(): return text exposition from correct registry (handles multiprocess)
- CONTENT_TYPE_LATEST: correct Prometheus content type
"""

import os
from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST
from prometheus_client import multiprocess


REQUEST_COUNTER = Counter(
    'sc_http_requests_total', 'Total HTTP requests', ['endpoint', 'status']
)

REQUEST_LATENCY = Histogram(
    'sc_http_request_latency_seconds', 'HTTP request latency seconds', ['endpoint']
)

EXTERNAL_CALLS = Counter(
    'sc_external_calls_total', 'Calls to external providers', ['provider', 'outcome']
)

EXTERNAL_CALL_LATENCY = Histogram(
    'sc_external_call_latency_seconds', 'External provider latency seconds', ['provider']
)

SPEECH_CACHE_HITS = Counter(
    'sc_speech_cache_hits_total', 'Speech synthesis requests answered from cache'
)


def observe_request(endpoint: str, status: int, latency_seconds: float) -> None:
    REQUEST_COUNTER.labels(endpoint=endpoint, status=str(status)).inc()
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(latency_seconds)


def observe_external_call(provider: str, outcome: str, latency_seconds: float = None) -> None:
    EXTERNAL_CALLS.labels(provider=provider, outcome=outcome).inc()
    if latency_seconds is not None:
        EXTERNAL_CALL_LATENCY.labels(provider=provider).observe(latency_seconds)


def observe_speech_cache_hit() -> None:
    SPEECH_CACHE_HITS.inc()


def metrics_latest() -> bytes:
    """Return the Prometheus text exposition, multiprocess-aware if configured."""
    prom_mp_dir = os.getenv('PROMETHEUS_MULTIPROC_DIR')
    if prom_mp_dir:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return generate_latest(registry)
    # Default registry
    return generate_latest()


__all__ = [
    'observe_request',
    'observe_external_call',
    'observe_speech_cache_hit',
    'metrics_latest',
    'CONTENT_TYPE_LATEST'
]

"""Módulo de observabilidade: métricas Prometheus, tracing OpenTelemetry e sink de erros."""
from shared.observability.errors import ErrorReporter
from shared.observability.metrics import UpstreamMetrics, setup_metrics
from shared.observability.state import ObservabilityState, init_observability
from shared.observability.tracing import (
    instrument_fastapi,
    instrument_httpx,
    setup_tracing,
    uninstrument_httpx,
)

__all__ = [
    "ErrorReporter",
    "ObservabilityState",
    "UpstreamMetrics",
    "init_observability",
    "instrument_fastapi",
    "instrument_httpx",
    "setup_metrics",
    "setup_tracing",
    "uninstrument_httpx",
]

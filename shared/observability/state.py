"""Estado de observabilidade com escopo de processo."""
from dataclasses import dataclass

from prometheus_client import CollectorRegistry, GCCollector, PlatformCollector, ProcessCollector
from opentelemetry.sdk.trace import TracerProvider

from shared.observability.errors import ErrorReporter
from shared.observability.metrics import UpstreamMetrics
from shared.observability.tracing import instrument_httpx, setup_tracing, uninstrument_httpx


@dataclass
class ObservabilityState:
    """Registry de métricas, tracer provider e sink de erros de um processo.

    Criado uma vez no startup (API ou worker) e repassado explicitamente a
    quem precisa. `shutdown()` faz o flush dos spans pendentes e desfaz a
    instrumentação do httpx, se foi este estado que a ativou.
    """

    service_name: str
    registry: CollectorRegistry
    tracer_provider: TracerProvider
    error_reporter: ErrorReporter
    upstream_metrics: UpstreamMetrics
    httpx_instrumented: bool = False

    def shutdown(self) -> None:
        if self.httpx_instrumented:
            uninstrument_httpx()
            self.httpx_instrumented = False
        self.tracer_provider.shutdown()


def init_observability(
    service_name: str,
    service_version: str = "1.0.0",
    otlp_endpoint: str | None = None,
    environment: str = "production",
) -> ObservabilityState:
    """Inicializa métricas e tracing de um processo."""
    registry = CollectorRegistry()
    # Mesmas séries default do REGISTRY global (processo, plataforma, GC)
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)

    provider = setup_tracing(
        service_name=service_name,
        service_version=service_version,
        otlp_endpoint=otlp_endpoint,
        environment=environment,
    )
    httpx_instrumented = instrument_httpx(provider) if otlp_endpoint else False

    return ObservabilityState(
        service_name=service_name,
        registry=registry,
        tracer_provider=provider,
        error_reporter=ErrorReporter(provider.get_tracer(service_name), registry),
        upstream_metrics=UpstreamMetrics(registry),
        httpx_instrumented=httpx_instrumented,
    )

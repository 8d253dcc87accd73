"""Configuração de tracing distribuído com OpenTelemetry."""
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from opentelemetry.baggage.propagation import W3CBaggagePropagator


def setup_tracing(
    service_name: str,
    service_version: str = "1.0.0",
    otlp_endpoint: str | None = None,
    environment: str = "production",
) -> TracerProvider:
    """Cria o TracerProvider do processo.

    O provider não é registrado como global: quem precisa dele recebe a
    instância explicitamente (ObservabilityState).

    Args:
        service_name: Nome do serviço (ex: tiktok-ads-api, tiktok-ads-worker)
        service_version: Versão do serviço
        otlp_endpoint: Endpoint do OTel Collector. Sem endpoint, spans não são exportados
        environment: Valor de deployment.environment
    """
    resource = Resource.create({
        SERVICE_NAME: service_name,
        SERVICE_VERSION: service_version,
        "deployment.environment": environment,
    })

    provider = TracerProvider(resource=resource)
    if otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))

        # Propagação W3C TraceContext + Baggage
        set_global_textmap(CompositePropagator([
            TraceContextTextMapPropagator(),
            W3CBaggagePropagator(),
        ]))
    return provider


def instrument_httpx(tracer_provider: TracerProvider) -> bool:
    """Instrumenta o httpx (patch global do módulo).

    Retorna False quando outro estado do processo já instrumentou; só quem
    instrumentou deve chamar uninstrument_httpx().
    """
    instrumentor = HTTPXClientInstrumentor()
    if instrumentor.is_instrumented_by_opentelemetry:
        return False
    instrumentor.instrument(tracer_provider=tracer_provider)
    return True


def uninstrument_httpx() -> None:
    HTTPXClientInstrumentor().uninstrument()


def instrument_fastapi(app, tracer_provider: TracerProvider):
    """Instrumenta um app FastAPI com OpenTelemetry ASGI."""
    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=tracer_provider,
        excluded_urls="metrics,health",
    )

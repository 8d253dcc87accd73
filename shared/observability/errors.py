"""
Sink de erros do serviço.

Toda falha não tratada (ou tratada como 500) passa por ErrorReporter:
a exceção é gravada no span OpenTelemetry corrente (exportado via OTLP),
logada via structlog e contada em errors_reported_total.
"""
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from prometheus_client import CollectorRegistry, Counter

from shared.core.logging import get_logger

logger = get_logger(__name__)


class ErrorReporter:
    """Encaminha exceções para o coletor de erros."""

    def __init__(self, tracer: trace.Tracer, registry: CollectorRegistry):
        self._tracer = tracer
        self.errors_total = Counter(
            "errors_reported_total",
            "Total de erros encaminhados ao sink de erros",
            ["error_type"],
            registry=registry,
        )

    def capture_exception(self, exc: BaseException, **context: Any) -> None:
        """Reporta `exc` uma única vez, com atributos de contexto opcionais."""
        attributes = {key: str(value) for key, value in context.items()}

        span = trace.get_current_span()
        if span.is_recording():
            self._record(span, exc, attributes)
        else:
            with self._tracer.start_as_current_span("error.captured") as span:
                self._record(span, exc, attributes)

        self.errors_total.labels(error_type=type(exc).__name__).inc()
        logger.error(
            "Erro reportado",
            error=str(exc),
            error_type=type(exc).__name__,
            **context,
        )

    @staticmethod
    def _record(span: trace.Span, exc: BaseException, attributes: dict[str, str]) -> None:
        span.record_exception(exc, attributes=attributes)
        span.set_status(Status(StatusCode.ERROR, str(exc)))

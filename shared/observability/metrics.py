"""Métricas Prometheus do serviço: HTTP de entrada e chamadas à API do TikTok."""
from prometheus_client import CollectorRegistry, Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator


class UpstreamMetrics:
    """Contadores das chamadas à TikTok Business API.

    Registrados no registry do processo (nunca no REGISTRY global), para que
    cada app criado tenha o seu próprio conjunto de séries.
    """

    def __init__(self, registry: CollectorRegistry):
        self.requests_total = Counter(
            "tiktok_api_requests_total",
            "Total de chamadas à TikTok Business API",
            ["endpoint", "outcome"],
            registry=registry,
        )
        self.request_duration_seconds = Histogram(
            "tiktok_api_request_duration_seconds",
            "Duração das chamadas à TikTok Business API em segundos",
            ["endpoint"],
            buckets=[0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
            registry=registry,
        )

    def observe(self, endpoint: str, outcome: str, duration: float) -> None:
        self.requests_total.labels(endpoint=endpoint, outcome=outcome).inc()
        self.request_duration_seconds.labels(endpoint=endpoint).observe(duration)


def setup_metrics(app, registry: CollectorRegistry, service_name: str = "unknown"):
    """Configura métricas Prometheus no app FastAPI.

    Expõe /metrics e instrumenta automaticamente todos os endpoints HTTP.
    Gera métricas: http_requests_total, http_request_duration_seconds,
    http_requests_in_progress.
    """
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        excluded_handlers=["/metrics", "/health"],
        inprogress_name="http_requests_in_progress",
        inprogress_labels=True,
        registry=registry,
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, include_in_schema=False, tags=["Observability"])
    return instrumentator

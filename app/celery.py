"""
Configuração do Celery para o refresh agendado de tokens.
Também controla o estado de observabilidade de cada processo worker.
"""

from typing import Optional

from celery import Celery
from celery.signals import worker_process_init, worker_process_shutdown

from shared.config import settings
from shared.core.logging import get_logger, setup_logging
from shared.observability import ObservabilityState, init_observability

logger = get_logger(__name__)

WORKER_SERVICE_NAME = "tiktok-ads-worker"

# Criar aplicação Celery
celery_app = Celery(
    "tiktok_ads",
    broker=settings.celery_broker,
    backend=settings.celery_backend,
    include=[
        "projects.tiktok_ads.jobs.token_refresh",
    ]
)

celery_app.conf.update(
    # Serialização
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",

    # Timezone
    timezone=settings.timezone,
    enable_utc=True,

    # Um refresh por vez em cada processo
    worker_concurrency=settings.celery_worker_concurrency,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,

    # Resultados
    result_expires=3600,  # 1 hora
    task_track_started=True,

    # Retry
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    broker_connection_retry_on_startup=True,

    # Refresh agendado com countdown próximo da vida do token (até dias);
    # visibility_timeout menor que o countdown faz o Redis reentregar a task
    broker_transport_options={"visibility_timeout": 7 * 24 * 3600},

    # Filas
    task_queues={
        "default": {},
    },
    task_default_queue="default",
    task_routes={
        "projects.tiktok_ads.jobs.*": {"queue": "default"},
    },
)

_worker_state: Optional[ObservabilityState] = None


@worker_process_init.connect
def init_worker_observability(**kwargs) -> None:
    """Inicializa logging, métricas e sink de erros do processo worker."""
    global _worker_state

    setup_logging(settings.log_level, service_name=WORKER_SERVICE_NAME)
    _worker_state = init_observability(
        service_name=WORKER_SERVICE_NAME,
        service_version=settings.app_version,
        otlp_endpoint=settings.otel_exporter_otlp_endpoint or None,
        environment=settings.environment,
    )
    if settings.otel_exporter_otlp_endpoint:
        from opentelemetry.instrumentation.celery import CeleryInstrumentor

        CeleryInstrumentor().instrument(tracer_provider=_worker_state.tracer_provider)

    logger.info("Worker inicializado", service=WORKER_SERVICE_NAME)


@worker_process_shutdown.connect
def shutdown_worker_observability(**kwargs) -> None:
    """Faz flush dos spans e descarta o estado do processo."""
    global _worker_state

    if _worker_state is not None:
        if settings.otel_exporter_otlp_endpoint:
            from opentelemetry.instrumentation.celery import CeleryInstrumentor

            CeleryInstrumentor().uninstrument()
        _worker_state.shutdown()
        _worker_state = None
    logger.info("Worker encerrado", service=WORKER_SERVICE_NAME)


def get_worker_state() -> ObservabilityState:
    """Estado do processo worker.

    Pools sem fork (solo, threads) não disparam worker_process_init;
    nesse caso o estado é criado na primeira task.
    """
    if _worker_state is None:
        init_worker_observability()
    return _worker_state

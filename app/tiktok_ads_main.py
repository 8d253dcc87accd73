"""
TikTok Ads - Entry point da API HTTP.
Processo FastAPI de integração com a TikTok Business API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.config import settings
from shared.core.logging import get_logger, setup_logging
from shared.infrastructure.tracing import RequestContextMiddleware
from shared.observability import (
    ObservabilityState,
    init_observability,
    instrument_fastapi,
    setup_metrics,
)
from projects.tiktok_ads.api.router import tiktok_ads_router
from projects.tiktok_ads.factory import TikTokAdsServices, build_services

API_SERVICE_NAME = "tiktok-ads-api"

logger = get_logger(__name__)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Reporta qualquer exceção não tratada e responde 500 genérico."""
    request.app.state.observability.error_reporter.capture_exception(
        exc, route=request.url.path, method=request.method
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(
    observability: Optional[ObservabilityState] = None,
    services: Optional[TikTokAdsServices] = None,
) -> FastAPI:
    """
    Cria o app com estado explícito de processo.

    Args:
        observability: Registry, tracer e sink de erros. Criado a partir das
            settings quando omitido.
        services: Clientes e OAuthService. Criados com o cliente HTTP real
            quando omitidos.
    """
    setup_logging(settings.log_level, service_name=API_SERVICE_NAME)

    if observability is None:
        observability = init_observability(
            service_name=API_SERVICE_NAME,
            service_version=settings.app_version,
            otlp_endpoint=settings.otel_exporter_otlp_endpoint or None,
            environment=settings.environment,
        )
    if services is None:
        services = build_services(metrics=observability.upstream_metrics)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Iniciando TikTok Ads API",
            version=settings.app_version,
            environment=settings.environment,
            port=settings.port,
        )
        yield
        logger.info("Encerrando TikTok Ads API")
        await services.aclose()
        observability.shutdown()

    app = FastAPI(
        title="TikTok Ads Integration",
        description="""
        Integração com a TikTok Business API.

        * **OAuth**: autorização, troca de code e refresh agendado de tokens
        * **Campaigns**: criação de campanhas de conversão
        * **Reports**: impressões, cliques e conversões por campanha
        """,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.observability = observability
    app.state.tiktok_ads = services

    if settings.otel_exporter_otlp_endpoint:
        instrument_fastapi(app, observability.tracer_provider)

    # Métricas Prometheus (/metrics)
    setup_metrics(app, observability.registry, service_name=API_SERVICE_NAME)

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(tiktok_ads_router)

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.tiktok_ads_main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )

"""
Job Celery para renovação de tokens do TikTok.
Agendado com countdown pelo OAuthService a cada troca/renovação de token.
"""

import asyncio

from app.celery import celery_app, get_worker_state
from shared.core.logging import get_logger
from shared.observability import ObservabilityState
from projects.tiktok_ads.config import tiktok_settings
from projects.tiktok_ads.factory import build_services
from projects.tiktok_ads.schemas.oauth import TokenPair

logger = get_logger(__name__)


async def run_token_refresh(refresh_token: str, state: ObservabilityState) -> TokenPair:
    """Renova o token; o OAuthService agenda o próximo refresh."""
    services = build_services(metrics=state.upstream_metrics)
    try:
        return await services.oauth.refresh_token(refresh_token)
    finally:
        await services.aclose()


@celery_app.task(
    bind=True,
    name="projects.tiktok_ads.jobs.token_refresh.tiktok_ads_token_refresh",
    max_retries=tiktok_settings.tiktok_token_refresh_max_retries,
    default_retry_delay=tiktok_settings.tiktok_token_refresh_retry_delay,
    acks_late=True,
)
def tiktok_ads_token_refresh(self, refresh_token: str):
    """
    Renova o access token a partir do refresh token recebido.
    Falhas vão para o sink de erros e voltam para a fila via retry do Celery.
    """
    state = get_worker_state()

    try:
        token = asyncio.run(run_token_refresh(refresh_token, state))
    except Exception as e:
        state.error_reporter.capture_exception(
            e,
            task=self.name,
            attempt=self.request.retries + 1,
        )
        raise self.retry(exc=e)

    logger.info(
        "Token renovado pelo worker",
        expires_at=str(token.expires_at),
    )
    return {"expires_at": token.expires_at.isoformat() if token.expires_at else None}

"""
Agendamento do próximo refresh de token.

O OAuthService só conhece o protocolo RefreshScheduler; a implementação
padrão publica a task Celery com countdown.
"""

import asyncio
from typing import Any, Optional, Protocol

from shared.core.logging import get_logger

logger = get_logger(__name__)


class RefreshScheduler(Protocol):
    async def schedule_refresh(self, refresh_token: str, delay_seconds: int) -> None: ...


def compute_refresh_delay(expires_in: int, margin_seconds: int) -> int:
    """Segundos até o refresh: expiração menos a margem, nunca negativo."""
    return max(expires_in - margin_seconds, 0)


class CeleryRefreshScheduler:
    """Publica tiktok_ads_token_refresh no broker com atraso."""

    def __init__(self, task: Optional[Any] = None, queue: str = "default"):
        self._task = task
        self.queue = queue

    @property
    def task(self):
        if self._task is None:
            from projects.tiktok_ads.jobs.token_refresh import tiktok_ads_token_refresh

            self._task = tiktok_ads_token_refresh
        return self._task

    async def schedule_refresh(self, refresh_token: str, delay_seconds: int) -> None:
        # apply_async bloqueia no publish do broker
        result = await asyncio.to_thread(
            self.task.apply_async,
            args=[refresh_token],
            countdown=delay_seconds,
            queue=self.queue,
        )
        logger.info(
            "Refresh de token agendado",
            task_id=getattr(result, "id", None),
            delay_seconds=delay_seconds,
        )

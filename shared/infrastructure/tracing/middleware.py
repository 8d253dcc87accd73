"""
Middleware que captura/gera o request_id e o injeta no contexto do structlog.
"""
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shared.infrastructure.logging.structlog_config import get_logger

logger = get_logger("http.requests")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware que:
    1. Captura X-Request-ID do header ou gera novo
    2. Vincula request_id a todos os logs da requisição
    3. Loga request received e response sent
    """

    EXCLUDED_PATHS = frozenset({"/health", "/metrics"})

    async def dispatch(self, request: Request, call_next):
        # Health e scrape não poluem os logs
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.time()
        logger.info(
            "Request recebida",
            path=request.url.path,
            method=request.method,
            ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
            logger.info(
                "Response enviada",
                status_code=response.status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as e:
            logger.error(
                "Request falhou",
                error_type=type(e).__name__,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

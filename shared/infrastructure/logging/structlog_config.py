"""
Configuração de logging estruturado com structlog.

Campos sensíveis (tokens OAuth, client secret) são mascarados antes da
renderização, para que nenhum processo escreva credenciais em stdout.
"""

import logging
import sys
from typing import Any, Optional

import structlog

SENSITIVE_KEYS = frozenset({
    "access_token",
    "refresh_token",
    "client_secret",
    "secret",
    "token",
    "code",
})

NOISY_LOGGERS = ("httpx", "httpcore", "httpcore.http11", "httpcore.connection", "celery.redirected")


def mask_value(value: Any) -> str:
    """Mantém só os 4 últimos caracteres de um valor sensível."""
    text = str(value)
    if len(text) <= 4:
        return "***"
    return f"***{text[-4:]}"


def redact_sensitive_fields(_logger, _method_name: str, event_dict: dict) -> dict:
    """Processor structlog que mascara credenciais no evento."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = mask_value(event_dict[key])
    return event_dict


def setup_logging(log_level: str = "INFO", service_name: Optional[str] = None) -> None:
    """
    Configura logging estruturado para o processo (API ou worker).

    Args:
        log_level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Se informado, é anexado a todos os eventos como `service`
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            redact_sensitive_fields,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
            if log_level.upper() == "DEBUG"
            else structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Obtém um logger configurado.

    Args:
        name: Nome do logger (geralmente __name__)

    Returns:
        Logger estruturado
    """
    return structlog.get_logger(name)

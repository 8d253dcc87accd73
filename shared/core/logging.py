"""
Atalho de import para o logging estruturado.
A implementação vive em shared.infrastructure.logging.structlog_config.
"""
from shared.infrastructure.logging.structlog_config import (
    get_logger,
    redact_sensitive_fields,
    setup_logging,
)

__all__ = ["setup_logging", "get_logger", "redact_sensitive_fields"]

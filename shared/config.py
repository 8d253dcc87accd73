"""
Atalho de import para as configurações globais do serviço.
A implementação vive em shared.infrastructure.config.settings.
"""
from shared.infrastructure.config.settings import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]

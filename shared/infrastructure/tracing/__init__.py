"""Correlação de requisições HTTP nos logs."""
from .middleware import REQUEST_ID_HEADER, RequestContextMiddleware

__all__ = ["REQUEST_ID_HEADER", "RequestContextMiddleware"]

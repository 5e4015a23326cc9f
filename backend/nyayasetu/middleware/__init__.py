"""HTTP middleware"""
from .logging_middleware import ErrorLoggingMiddleware, RequestLoggingMiddleware

__all__ = ["ErrorLoggingMiddleware", "RequestLoggingMiddleware"]

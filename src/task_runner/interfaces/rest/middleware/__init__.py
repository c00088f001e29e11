"""
REST 中间件
"""
from task_runner.interfaces.rest.middleware.logging_middleware import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]

"""
领域错误

定义领域层的错误类型。
"""
from typing import Any, Optional


class DomainError(Exception):
    """领域错误基类"""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(DomainError):
    """未找到错误"""
    pass


class ValidationError(DomainError):
    """验证错误"""
    pass

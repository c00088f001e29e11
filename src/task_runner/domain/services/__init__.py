"""
领域服务

命令过滤与沙箱平台端口。
"""
from task_runner.domain.services.command_filter import (
    DENIED_COMMAND_MARKERS,
    is_command_safe,
    validate_command,
)
from task_runner.domain.services.sandbox_platform import ISandboxPlatform

__all__ = [
    "DENIED_COMMAND_MARKERS",
    "is_command_safe",
    "validate_command",
    "ISandboxPlatform",
]

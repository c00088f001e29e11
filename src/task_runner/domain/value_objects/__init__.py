"""
值对象

不可变的领域值类型。
"""
from task_runner.domain.value_objects.execution_record import (
    ExecutionRecord,
    build_execution_record,
)
from task_runner.domain.value_objects.sandbox_handle import SandboxHandle
from task_runner.domain.value_objects.sandbox_phase import SandboxPhase

__all__ = [
    "ExecutionRecord",
    "build_execution_record",
    "SandboxHandle",
    "SandboxPhase",
]

"""
ORM 模型
"""
from task_runner.infrastructure.persistence.models.task_model import TaskModel
from task_runner.infrastructure.persistence.models.execution_record_model import ExecutionRecordModel

__all__ = ["TaskModel", "ExecutionRecordModel"]

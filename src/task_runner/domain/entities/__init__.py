"""
实体

领域实体。
"""
from task_runner.domain.entities.task import Task

__all__ = ["Task"]

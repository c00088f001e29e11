"""
任务仓储实现
"""
from task_runner.infrastructure.persistence.repositories.sql_task_repository import SqlTaskRepository
from task_runner.infrastructure.persistence.repositories.memory_task_repository import InMemoryTaskRepository

__all__ = ["SqlTaskRepository", "InMemoryTaskRepository"]

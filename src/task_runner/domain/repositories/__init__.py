"""
仓储接口

领域层定义的持久化 Port。
"""
from task_runner.domain.repositories.task_repository import ITaskRepository, TaskRepositoryScope

__all__ = ["ITaskRepository", "TaskRepositoryScope"]

"""
任务仓储接口

定义任务持久化的抽象接口（Port）。
"""
from abc import ABC, abstractmethod
from typing import AsyncContextManager, Callable, List, Optional

from task_runner.domain.entities.task import Task


class ITaskRepository(ABC):
    """
    任务仓储接口

    这是领域层定义的 Port，由基础设施层实现 Adapter。
    save 按执行记录 id 合并：已存在的记录不会重复写入，也不会被删除。
    """

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """保存任务（创建或更新），返回持久化后的任务"""
        pass

    @abstractmethod
    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """根据 ID 查找任务"""
        pass

    @abstractmethod
    async def find_all(self, offset: int = 0, limit: int = 100) -> List[Task]:
        """查找所有任务"""
        pass

    @abstractmethod
    async def find_by_name_containing(self, name: str) -> List[Task]:
        """查找名称包含指定子串的任务"""
        pass

    @abstractmethod
    async def exists_by_id(self, task_id: str) -> bool:
        """检查任务是否存在"""
        pass

    @abstractmethod
    async def delete_by_id(self, task_id: str) -> None:
        """删除任务及其执行记录"""
        pass


# 每次调用打开一个短生命周期的仓储（SQL 实现对应一个数据库会话），
# 退出上下文时提交并释放连接
TaskRepositoryScope = Callable[[], AsyncContextManager[ITaskRepository]]

"""
内存任务仓储

不依赖数据库的仓储实现，用于本地开发和测试。进程退出后数据丢失。
"""
import asyncio
import copy
from typing import Dict, List, Optional

from task_runner.domain.entities.task import Task
from task_runner.domain.repositories.task_repository import ITaskRepository


class InMemoryTaskRepository(ITaskRepository):
    """
    内存任务仓储

    保存和返回的都是副本，调用方修改返回的实体不会影响已存储的数据。
    """

    def __init__(self):
        self._tasks: Dict[str, Task] = {}
        self._lock = asyncio.Lock()

    async def save(self, task: Task) -> Task:
        async with self._lock:
            stored = self._tasks.get(task.id)
            if stored is None:
                stored = Task(
                    id=task.id,
                    name=task.name,
                    owner=task.owner,
                    command=task.command,
                    created_at=task.created_at,
                    updated_at=task.updated_at,
                )
                self._tasks[task.id] = stored
            else:
                stored.name = task.name
                stored.owner = task.owner
                stored.command = task.command
                stored.updated_at = task.updated_at

            # 按 id 合并执行记录，只追加缺失的记录
            for record in task.executions:
                if not stored.has_record(record.id):
                    stored.executions.append(record)

            return copy.deepcopy(stored)

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        task = self._tasks.get(task_id)
        return copy.deepcopy(task) if task else None

    async def find_all(self, offset: int = 0, limit: int = 100) -> List[Task]:
        offset = max(0, offset)
        tasks = list(self._tasks.values())[offset:offset + max(1, limit)]
        return [copy.deepcopy(t) for t in tasks]

    async def find_by_name_containing(self, name: str) -> List[Task]:
        return [copy.deepcopy(t) for t in self._tasks.values() if name in t.name]

    async def exists_by_id(self, task_id: str) -> bool:
        return task_id in self._tasks

    async def delete_by_id(self, task_id: str) -> None:
        self._tasks.pop(task_id, None)

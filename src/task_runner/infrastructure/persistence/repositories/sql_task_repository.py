"""
任务仓储实现

使用 SQLAlchemy 实现任务仓储接口。
按照数据表命名规范使用 f_ 前缀字段名。
"""
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from task_runner.domain.entities.task import Task
from task_runner.domain.repositories.task_repository import ITaskRepository
from task_runner.infrastructure.persistence.models.execution_record_model import ExecutionRecordModel
from task_runner.infrastructure.persistence.models.task_model import TaskModel


class SqlTaskRepository(ITaskRepository):
    """
    任务仓储实现

    这是基础设施层的 Adapter，实现领域层定义的 Port。

    执行记录只插入缺失的行，已存在的行不会被更新或删除。两个并发的
    执行各自追加一条记录后保存，两条记录都会保留。
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, task: Task) -> Task:
        """保存任务（创建或更新）"""
        model = await self._session.get(TaskModel, task.id)

        if model:
            model.apply_entity(task)
        else:
            model = TaskModel.from_entity(task)
            self._session.add(model)
        await self._session.flush()

        stmt = select(ExecutionRecordModel.f_id, ExecutionRecordModel.f_seq).where(
            ExecutionRecordModel.f_task_id == task.id
        )
        rows = (await self._session.execute(stmt)).all()
        existing_ids = {row.f_id for row in rows}
        next_seq = max((row.f_seq for row in rows), default=-1) + 1

        for record in task.executions:
            if record.id in existing_ids:
                continue
            self._session.add(ExecutionRecordModel.from_value(task.id, record, seq=next_seq))
            existing_ids.add(record.id)
            next_seq += 1

        await self._session.flush()
        await self._session.refresh(model, attribute_names=["executions"])
        return model.to_entity()

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """根据 ID 查找任务"""
        model = await self._session.get(TaskModel, task_id)
        return model.to_entity() if model else None

    async def find_all(self, offset: int = 0, limit: int = 100) -> List[Task]:
        """查找所有任务（按创建时间排序，支持分页）"""
        limit = max(1, min(limit, 1000))
        offset = max(0, offset)

        stmt = (
            select(TaskModel)
            .order_by(TaskModel.f_created_at, TaskModel.f_id)
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]

    async def find_by_name_containing(self, name: str) -> List[Task]:
        """查找名称包含指定子串的任务（大小写规则取决于数据库排序规则）"""
        stmt = (
            select(TaskModel)
            .where(TaskModel.f_name.contains(name, autoescape=True))
            .order_by(TaskModel.f_created_at, TaskModel.f_id)
        )
        result = await self._session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]

    async def exists_by_id(self, task_id: str) -> bool:
        """检查任务是否存在"""
        stmt = select(func.count()).select_from(TaskModel).where(TaskModel.f_id == task_id)
        result = await self._session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def delete_by_id(self, task_id: str) -> None:
        """删除任务及其执行记录"""
        await self._session.execute(
            delete(ExecutionRecordModel).where(ExecutionRecordModel.f_task_id == task_id)
        )
        await self._session.execute(delete(TaskModel).where(TaskModel.f_id == task_id))
        await self._session.flush()

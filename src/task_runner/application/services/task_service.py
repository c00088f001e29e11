"""
任务应用服务

编排任务定义的创建、查询、删除用例。
"""
import uuid
from typing import List

from task_runner.application.commands.save_task import SaveTaskCommand
from task_runner.application.dtos.task_dto import TaskDTO
from task_runner.application.queries.find_tasks import FindTasksQuery
from task_runner.domain.entities.task import Task
from task_runner.domain.repositories.task_repository import ITaskRepository
from task_runner.domain.services.command_filter import validate_command
from task_runner.infrastructure.logging import get_logger
from task_runner.shared.errors.domain import NotFoundError

logger = get_logger(__name__)


class TaskService:
    """
    任务应用服务

    命令安全过滤只在这里执行一次，未通过的任务不会入库。
    """

    def __init__(self, task_repo: ITaskRepository):
        self._task_repo = task_repo

    async def save_task(self, command: SaveTaskCommand) -> TaskDTO:
        """
        创建或更新任务用例

        流程：
        1. 校验命令
        2. 已存在则更新定义（保留执行历史），否则创建
        3. 保存到仓储
        """
        validate_command(command.command)

        task = None
        if command.task_id:
            task = await self._task_repo.find_by_id(command.task_id)

        if task:
            task.update_definition(
                name=command.name,
                owner=command.owner,
                command=command.command,
            )
        else:
            task = Task(
                id=command.task_id or self._generate_task_id(),
                name=command.name,
                owner=command.owner,
                command=command.command,
            )

        saved = await self._task_repo.save(task)
        logger.info("Task saved", task_id=saved.id, name=saved.name)
        return TaskDTO.from_entity(saved)

    async def get_task(self, task_id: str) -> TaskDTO:
        """获取任务用例"""
        task = await self._task_repo.find_by_id(task_id)
        if not task:
            raise NotFoundError(f"Task not found: {task_id}")
        return TaskDTO.from_entity(task)

    async def find_tasks(self, query: FindTasksQuery) -> List[TaskDTO]:
        """
        查询任务用例

        - 指定 task_id：返回单个任务的列表，不存在时抛出 NotFoundError
        - 指定 name_contains：名称模糊匹配，没有结果时抛出 NotFoundError
        - 都未指定：分页返回全部任务
        """
        if query.task_id:
            return [await self.get_task(query.task_id)]

        if query.name_contains is not None:
            tasks = await self._task_repo.find_by_name_containing(query.name_contains)
            if not tasks:
                raise NotFoundError(f"No task name contains: {query.name_contains}")
            return [TaskDTO.from_entity(t) for t in tasks]

        tasks = await self._task_repo.find_all(offset=query.offset, limit=query.limit)
        return [TaskDTO.from_entity(t) for t in tasks]

    async def delete_task(self, task_id: str) -> None:
        """删除任务用例（执行记录随任务一起删除）"""
        if not await self._task_repo.exists_by_id(task_id):
            raise NotFoundError(f"Task not found: {task_id}")

        await self._task_repo.delete_by_id(task_id)
        logger.info("Task deleted", task_id=task_id)

    def _generate_task_id(self) -> str:
        """生成任务 ID"""
        return f"task_{uuid.uuid4().hex}"

"""
执行监督服务

编排一次完整的任务执行：查找任务、在沙箱中运行命令、生成执行记录、
追加到任务历史并保存。
"""
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

from task_runner.application.commands.execute_task import ExecuteTaskCommand
from task_runner.application.dtos.task_dto import TaskDTO
from task_runner.application.services.sandbox_provisioner import SandboxProvisioner
from task_runner.domain.repositories.task_repository import TaskRepositoryScope
from task_runner.domain.value_objects.execution_record import build_execution_record
from task_runner.infrastructure.logging import get_logger
from task_runner.shared.errors.domain import NotFoundError

logger = get_logger(__name__)


class ExecutionSupervisor:
    """
    执行监督服务

    每次 execute() 恰好对应一次沙箱生命周期，不重试，也不是幂等的：
    调用两次会运行两次命令并追加两条记录。

    查找和保存各自使用一个短生命周期的仓储，沙箱运行期间不占用数据库连接。
    """

    def __init__(
        self,
        repository_scope: TaskRepositoryScope,
        provisioner: SandboxProvisioner,
        max_wait_seconds: Optional[float] = None,
    ):
        self._repository_scope = repository_scope
        self._provisioner = provisioner
        self._max_wait_seconds = max_wait_seconds

    async def execute(self, command: ExecuteTaskCommand) -> TaskDTO:
        """
        执行任务用例

        流程：
        1. 查找任务，不存在时抛出 NotFoundError（不创建沙箱）
        2. 记录开始时间
        3. 在沙箱中运行命令
        4. 记录结束时间
        5. 生成执行记录并追加到任务
        6. 在新的仓储中保存任务
        """
        async with self._repository_scope() as task_repo:
            task = await task_repo.find_by_id(command.task_id)
        if not task:
            raise NotFoundError(f"Task not found: {command.task_id}")

        logger.info("Executing task", task_id=task.id)
        # 结束时间由单调时钟推算，墙上时钟回拨不会产生 end < start
        start_time = datetime.now(timezone.utc)
        started = time.monotonic()
        result = await self._provisioner.run(
            task.command,
            max_wait_seconds=self._max_wait_seconds,
        )
        end_time = start_time + timedelta(seconds=time.monotonic() - started)

        record = build_execution_record(start_time, end_time, result.output)
        task.append_execution(record)
        async with self._repository_scope() as task_repo:
            saved = await task_repo.save(task)

        logger.info(
            "Task executed",
            task_id=task.id,
            sandbox=result.sandbox.name,
            phase=result.phase.value if result.phase else None,
            failure=type(result.failure).__name__ if result.failure else None,
            duration=f"{record.duration_seconds:.3f}s",
        )
        return TaskDTO.from_entity(saved)

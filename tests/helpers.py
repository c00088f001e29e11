"""
共享测试工具

提供通用的测试实体、假沙箱平台和 mock 工具，减少测试代码重复。
"""
import asyncio
import time
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Set, Tuple
from unittest.mock import AsyncMock, Mock

from task_runner.domain.entities.task import Task
from task_runner.domain.services.sandbox_platform import ISandboxPlatform
from task_runner.domain.value_objects.execution_record import ExecutionRecord
from task_runner.domain.value_objects.sandbox_handle import SandboxHandle
from task_runner.domain.value_objects.sandbox_phase import SandboxPhase


def create_mock_task(
    task_id: str = "task-123",
    name: str = "echo",
    owner: str = "ops",
    command: str = "echo hello",
    executions: Optional[List[ExecutionRecord]] = None,
) -> Task:
    """
    创建测试用任务实体

    Args:
        task_id: 任务 ID
        name: 任务名称
        owner: 任务所有者
        command: shell 命令
        executions: 已有执行记录

    Returns:
        Task 实体
    """
    return Task(
        id=task_id,
        name=name,
        owner=owner,
        command=command,
        executions=list(executions or []),
    )


def create_execution_record(
    output: str = "hello\n",
    start_time: Optional[datetime] = None,
    duration_seconds: float = 1.5,
) -> ExecutionRecord:
    """创建测试用执行记录"""
    start = start_time or datetime(2025, 1, 14, 10, 30, 45, 123456, tzinfo=timezone.utc)
    return ExecutionRecord(
        start_time=start,
        end_time=start + timedelta(seconds=duration_seconds),
        output=output,
    )


class FakeSandboxPlatform(ISandboxPlatform):
    """
    假沙箱平台

    按给定顺序返回阶段（最后一个阶段重复返回），记录每次创建和删除。
    各阶段的错误可以单独注入。
    """

    def __init__(
        self,
        phases: Iterable[SandboxPhase] = (SandboxPhase.PENDING, SandboxPhase.SUCCEEDED),
        output: str = "hello\n",
        create_error: Optional[Exception] = None,
        status_error: Optional[Exception] = None,
        output_error: Optional[Exception] = None,
        delete_error: Optional[Exception] = None,
        reachable: bool = True,
        create_delay: float = 0.0,
    ):
        self._phases = list(phases)
        self.output = output
        self.create_error = create_error
        self.status_error = status_error
        self.output_error = output_error
        self.delete_error = delete_error
        self.reachable = reachable
        self.create_delay = create_delay

        self.created: List[Tuple[SandboxHandle, str]] = []
        self.deleted: List[SandboxHandle] = []
        self.status_calls = 0
        self.ping_calls = 0
        # 已创建且尚未删除的沙箱名
        self.live: Set[str] = set()

    @property
    def delete_count(self) -> int:
        return len(self.deleted)

    async def create_execution_unit(self, handle: SandboxHandle, command: str) -> None:
        self.created.append((handle, command))
        await asyncio.to_thread(self._create_blocking, handle)

    def _create_blocking(self, handle: SandboxHandle) -> None:
        # 与真实客户端一样在线程里阻塞，取消无法提前结束
        if self.create_delay:
            time.sleep(self.create_delay)
        if self.create_error:
            raise self.create_error
        self.live.add(handle.name)

    async def get_status(self, handle: SandboxHandle) -> SandboxPhase:
        self.status_calls += 1
        if self.status_error:
            raise self.status_error
        if len(self._phases) > 1:
            return self._phases.pop(0)
        return self._phases[0]

    async def get_output(self, handle: SandboxHandle) -> str:
        if self.output_error:
            raise self.output_error
        return self.output

    async def delete(self, handle: SandboxHandle) -> None:
        self.deleted.append(handle)
        self.live.discard(handle.name)
        if self.delete_error:
            raise self.delete_error

    async def ping(self) -> bool:
        self.ping_calls += 1
        return self.reachable


def create_mock_repository(
    find_by_id_return=None,
    save_return=None,
    find_all_return=None,
    find_by_name_return=None,
    exists_return: bool = True,
) -> Mock:
    """
    创建模拟任务仓储

    save 默认原样返回传入的任务。

    Returns:
        Mock 对象
    """
    repo = Mock()
    if save_return is None:
        repo.save = AsyncMock(side_effect=lambda task: task)
    else:
        repo.save = AsyncMock(return_value=save_return)
    repo.find_by_id = AsyncMock(return_value=find_by_id_return)
    repo.find_all = AsyncMock(return_value=find_all_return or [])
    repo.find_by_name_containing = AsyncMock(return_value=find_by_name_return or [])
    repo.exists_by_id = AsyncMock(return_value=exists_return)
    repo.delete_by_id = AsyncMock()
    return repo


class RepositoryScope:
    """
    测试用仓储工厂

    每次调用返回一个产出同一仓储的上下文，并记录当前打开的上下文数。
    """

    def __init__(self, repository):
        self.repository = repository
        self.open_count = 0
        self.opened = 0

    @asynccontextmanager
    async def __call__(self):
        self.open_count += 1
        self.opened += 1
        try:
            yield self.repository
        finally:
            self.open_count -= 1

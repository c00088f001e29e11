"""
依赖注入配置

配置和提供应用所需的所有依赖项。
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from fastapi import Depends, FastAPI

from task_runner.application.services.execution_supervisor import ExecutionSupervisor
from task_runner.application.services.sandbox_provisioner import SandboxProvisioner
from task_runner.application.services.task_service import TaskService
from task_runner.domain.repositories.task_repository import ITaskRepository, TaskRepositoryScope
from task_runner.domain.services.sandbox_platform import ISandboxPlatform
from task_runner.infrastructure.config.settings import get_settings
from task_runner.infrastructure.logging import get_logger
from task_runner.infrastructure.persistence.database import db_manager
from task_runner.infrastructure.persistence.repositories.memory_task_repository import InMemoryTaskRepository
from task_runner.infrastructure.persistence.repositories.sql_task_repository import SqlTaskRepository

logger = get_logger(__name__)

_sandbox_platform_singleton: Optional[ISandboxPlatform] = None
_memory_repository_singleton: Optional[InMemoryTaskRepository] = None


def initialize_dependencies(app: FastAPI) -> None:
    """
    初始化依赖项

    Kubernetes 客户端只在启动时创建一次，之后通过 get_sandbox_platform 注入。
    """
    global _sandbox_platform_singleton, _memory_repository_singleton

    settings = get_settings()

    if _sandbox_platform_singleton is None:
        from task_runner.infrastructure.sandbox.k8s_sandbox_platform import K8sSandboxPlatform

        _sandbox_platform_singleton = K8sSandboxPlatform(
            namespace=settings.kubernetes_namespace,
            image=settings.sandbox_image,
            kube_config_path=settings.kube_config_path,
        )
        logger.info(
            "Kubernetes sandbox platform initialized",
            namespace=settings.kubernetes_namespace,
            image=settings.sandbox_image,
        )

    if not settings.use_sql_repositories and _memory_repository_singleton is None:
        _memory_repository_singleton = InMemoryTaskRepository()
        logger.info("Using in-memory task repository")

    app.state.sandbox_platform = _sandbox_platform_singleton


async def cleanup_dependencies(app: FastAPI) -> None:
    """清理依赖项"""
    global _sandbox_platform_singleton

    _sandbox_platform_singleton = None
    if hasattr(app.state, "sandbox_platform"):
        app.state.sandbox_platform = None


@asynccontextmanager
async def task_repository_scope() -> AsyncIterator[ITaskRepository]:
    """
    打开一个短生命周期的任务仓储

    use_sql_repositories 为 False 时返回进程内共享的内存仓储；
    否则每次打开一个新会话，退出时提交并归还连接。
    """
    global _memory_repository_singleton

    if not get_settings().use_sql_repositories:
        if _memory_repository_singleton is None:
            _memory_repository_singleton = InMemoryTaskRepository()
        yield _memory_repository_singleton
        return

    async with db_manager.get_session() as session:
        yield SqlTaskRepository(session)


async def get_task_repository() -> AsyncGenerator[ITaskRepository, None]:
    """获取任务仓储（请求级）"""
    async with task_repository_scope() as task_repo:
        yield task_repo


def get_task_repository_scope() -> TaskRepositoryScope:
    """获取仓储工厂，供需要按阶段开关会话的服务使用"""
    return task_repository_scope


def get_sandbox_platform() -> ISandboxPlatform:
    """获取沙箱平台（启动时创建的单例）"""
    if _sandbox_platform_singleton is None:
        raise RuntimeError("Sandbox platform not initialized. Call initialize_dependencies() first.")
    return _sandbox_platform_singleton


def get_sandbox_provisioner(
    platform: ISandboxPlatform = Depends(get_sandbox_platform),
) -> SandboxProvisioner:
    """获取沙箱供应服务"""
    settings = get_settings()
    return SandboxProvisioner(
        platform=platform,
        namespace=settings.kubernetes_namespace,
        name_prefix=settings.sandbox_name_prefix,
        poll_interval_seconds=settings.sandbox_poll_interval_seconds,
    )


def get_task_service(
    task_repo: ITaskRepository = Depends(get_task_repository),
) -> TaskService:
    """获取任务服务"""
    return TaskService(task_repo=task_repo)


def get_execution_supervisor(
    repository_scope: TaskRepositoryScope = Depends(get_task_repository_scope),
    provisioner: SandboxProvisioner = Depends(get_sandbox_provisioner),
) -> ExecutionSupervisor:
    """获取执行监督服务"""
    return ExecutionSupervisor(
        repository_scope=repository_scope,
        provisioner=provisioner,
        max_wait_seconds=get_settings().max_wait_seconds,
    )

"""
沙箱平台接口

定义创建、观察、读取输出和删除临时执行单元的抽象接口（Port），
由基础设施层（Kubernetes）实现 Adapter。
"""
from abc import ABC, abstractmethod

from task_runner.domain.value_objects.sandbox_handle import SandboxHandle
from task_runner.domain.value_objects.sandbox_phase import SandboxPhase


class ISandboxPlatform(ABC):
    """
    沙箱平台接口

    实现方应将平台错误转换为 shared.errors.infrastructure 中的
    ProvisionFailure / ObservationFailure / RetrievalFailure / CleanupFailure。
    """

    @abstractmethod
    async def create_execution_unit(
        self,
        handle: SandboxHandle,
        command: str
    ) -> None:
        """
        创建执行单元

        单个容器运行 `/bin/sh -c <command>`，重启策略为 Never。
        """
        pass

    @abstractmethod
    async def get_status(self, handle: SandboxHandle) -> SandboxPhase:
        """获取执行单元当前阶段"""
        pass

    @abstractmethod
    async def get_output(self, handle: SandboxHandle) -> str:
        """获取执行单元输出（stdout 与 stderr 合并）"""
        pass

    @abstractmethod
    async def delete(self, handle: SandboxHandle) -> None:
        """删除执行单元"""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """检查平台连接状态"""
        pass

"""
沙箱供应服务

为一条命令创建临时沙箱，轮询直到进入终态，读取输出，并且无论结果如何
都删除沙箱。

平台错误不会抛给调用方，而是转换为输出文本，保证 run() 总能返回
一个可以写入执行记录的结果。
"""
import asyncio
from dataclasses import dataclass
from typing import Optional

from task_runner.domain.services.sandbox_platform import ISandboxPlatform
from task_runner.domain.value_objects.sandbox_handle import SandboxHandle
from task_runner.domain.value_objects.sandbox_phase import SandboxPhase
from task_runner.infrastructure.logging import get_logger
from task_runner.shared.errors.infrastructure import (
    CleanupFailure,
    ObservationFailure,
    ProvisionFailure,
    RetrievalFailure,
    SandboxError,
    SandboxInterrupted,
    SandboxTimeout,
)

logger = get_logger(__name__)


@dataclass
class ProvisionResult:
    """沙箱执行结果"""
    output: str
    sandbox: SandboxHandle
    phase: Optional[SandboxPhase] = None
    failure: Optional[SandboxError] = None

    @property
    def succeeded(self) -> bool:
        """沙箱生命周期是否没有发生平台错误（与命令退出码无关）"""
        return self.failure is None


class SandboxProvisioner:
    """
    沙箱供应服务

    每次 run() 使用一个新生成的 SandboxHandle，并发调用之间不共享状态。
    """

    def __init__(
        self,
        platform: ISandboxPlatform,
        namespace: str,
        name_prefix: str = "task-runner",
        poll_interval_seconds: float = 1.0,
    ):
        self._platform = platform
        self._namespace = namespace
        self._name_prefix = name_prefix
        self._poll_interval_seconds = poll_interval_seconds

    async def run(
        self,
        command: str,
        max_wait_seconds: Optional[float] = None,
    ) -> ProvisionResult:
        """
        在新的沙箱中运行命令

        流程：
        1. 生成唯一的沙箱句柄
        2. 创建执行单元（/bin/sh -c <command>，不重启）
        3. 轮询状态直到 succeeded / failed，最长等待 max_wait_seconds
        4. 读取输出，失败时输出为诊断信息
        5. 删除沙箱（总是执行，删除失败只记录日志）
        """
        handle = SandboxHandle.generate(self._namespace, self._name_prefix)
        logger.info("Provisioning sandbox", sandbox=handle.name, namespace=handle.namespace)

        try:
            return await self._execute(handle, command, max_wait_seconds)
        except (ProvisionFailure, ObservationFailure) as e:
            logger.error(
                "Sandbox execution failed",
                sandbox=handle.name,
                failure=type(e).__name__,
                error=e.message,
            )
            return ProvisionResult(
                output=f"Execution failed: {e.message}",
                sandbox=handle,
                failure=e,
            )
        except SandboxTimeout as e:
            logger.warning(
                "Sandbox timed out",
                sandbox=handle.name,
                timeout_seconds=e.timeout_seconds,
            )
            return ProvisionResult(
                output=f"Execution timed out after {e.timeout_seconds:g}s",
                sandbox=handle,
                failure=e,
            )
        except asyncio.CancelledError as e:
            failure = SandboxInterrupted(
                "wait for sandbox was cancelled",
                original_error=e,
            )
            logger.warning("Sandbox execution interrupted", sandbox=handle.name)
            return ProvisionResult(
                output=f"Execution interrupted: {failure.message}",
                sandbox=handle,
                failure=failure,
            )
        except Exception as e:
            logger.exception("Unexpected error during sandbox execution", sandbox=handle.name)
            return ProvisionResult(
                output=f"Execution failed: {e!r}",
                sandbox=handle,
                failure=SandboxError(str(e), original_error=e),
            )
        finally:
            await self._cleanup(handle)

    async def _execute(
        self,
        handle: SandboxHandle,
        command: str,
        max_wait_seconds: Optional[float],
    ) -> ProvisionResult:
        await self._create(handle, command)
        logger.info("Sandbox creation requested", sandbox=handle.name)

        phase = await self._wait(handle, max_wait_seconds)
        logger.info("Sandbox finished", sandbox=handle.name, phase=phase.value)

        try:
            output = await self._platform.get_output(handle)
        except RetrievalFailure as e:
            logger.warning("Failed to get sandbox output", sandbox=handle.name, error=e.message)
            return ProvisionResult(
                output=f"Failed to get pod logs: {e.message}",
                sandbox=handle,
                phase=phase,
                failure=e,
            )

        return ProvisionResult(output=output or "", sandbox=handle, phase=phase)

    async def _create(self, handle: SandboxHandle, command: str) -> None:
        """
        创建执行单元

        平台调用运行在线程中，取消无法中止它。被取消时先等创建请求落地，
        再把取消继续抛出，保证随后的删除不会早于创建。
        """
        create = asyncio.ensure_future(self._platform.create_execution_unit(handle, command))
        try:
            await asyncio.shield(create)
        except asyncio.CancelledError:
            await asyncio.wait({create})
            if not create.cancelled() and create.exception() is not None:
                logger.warning(
                    "Sandbox creation failed after cancellation",
                    sandbox=handle.name,
                    error=str(create.exception()),
                )
            raise

    async def _wait(
        self,
        handle: SandboxHandle,
        max_wait_seconds: Optional[float],
    ) -> SandboxPhase:
        """等待终态，超时抛出 SandboxTimeout"""
        if max_wait_seconds is None:
            return await self._poll_until_terminal(handle)

        try:
            return await asyncio.wait_for(
                self._poll_until_terminal(handle),
                timeout=max_wait_seconds,
            )
        except asyncio.TimeoutError as e:
            raise SandboxTimeout(
                f"Sandbox {handle.name} did not finish within {max_wait_seconds:g}s",
                timeout_seconds=max_wait_seconds,
                original_error=e,
            ) from e

    async def _poll_until_terminal(self, handle: SandboxHandle) -> SandboxPhase:
        while True:
            phase = await self._platform.get_status(handle)
            logger.debug("Sandbox phase observed", sandbox=handle.name, phase=phase.value)
            if phase.is_terminal():
                return phase
            await asyncio.sleep(self._poll_interval_seconds)

    async def _cleanup(self, handle: SandboxHandle) -> None:
        """删除沙箱，任何错误都只记录日志"""
        try:
            await self._platform.delete(handle)
            logger.info("Sandbox deleted", sandbox=handle.name)
        except CleanupFailure as e:
            logger.warning(
                "Failed to delete sandbox",
                sandbox=handle.name,
                namespace=handle.namespace,
                error=e.message,
            )
        except Exception as e:
            logger.warning(
                "Failed to delete sandbox",
                sandbox=handle.name,
                namespace=handle.namespace,
                error=str(e),
                exc_info=True,
            )

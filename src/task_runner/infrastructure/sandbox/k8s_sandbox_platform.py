"""
Kubernetes 沙箱平台

使用官方 Python kubernetes 客户端，以一次性 Pod 作为执行单元。

每个 Pod 只有一个容器，运行 `/bin/sh -c <command>`，restart_policy 为
Never。kubernetes 客户端是同步的，所有调用都通过 asyncio.to_thread
放到线程池执行，避免阻塞事件循环。
"""
import asyncio
from typing import Optional

from kubernetes import client, config
from kubernetes.client import (
    V1Container,
    V1ObjectMeta,
    V1Pod,
    V1PodSpec,
)
from kubernetes.client.rest import ApiException

from task_runner.domain.services.sandbox_platform import ISandboxPlatform
from task_runner.domain.value_objects.sandbox_handle import SandboxHandle
from task_runner.domain.value_objects.sandbox_phase import SandboxPhase
from task_runner.infrastructure.logging import get_logger
from task_runner.shared.errors.infrastructure import (
    CleanupFailure,
    KubernetesError,
    ObservationFailure,
    ProvisionFailure,
    RetrievalFailure,
)

logger = get_logger(__name__)

CONTAINER_NAME = "task-container"


def describe_api_exception(e: ApiException) -> str:
    """提取 ApiException 中最有用的信息（优先响应体）"""
    if e.body:
        return e.body if isinstance(e.body, str) else e.body.decode("utf-8", "replace")
    return f"{e.status} {e.reason}"


class K8sSandboxPlatform(ISandboxPlatform):
    """
    Kubernetes 沙箱平台

    客户端在启动时创建一次，通过构造函数注入到 SandboxProvisioner，
    不使用全局默认客户端。
    """

    def __init__(
        self,
        namespace: str = "default",
        image: str = "busybox",
        kube_config_path: Optional[str] = None,
        core_v1: Optional[client.CoreV1Api] = None,
    ):
        """
        初始化 Kubernetes 沙箱平台

        Args:
            namespace: 连接检查使用的命名空间
            image: 执行单元使用的镜像（基础设施配置，调用方不能指定）
            kube_config_path: kubeconfig 文件路径（可选，用于本地开发）
            core_v1: 已创建的 CoreV1Api（可选，测试时注入）
        """
        self._namespace = namespace
        self._image = image
        self._core_v1 = core_v1 or client.CoreV1Api(self._load_api_client(kube_config_path))

    @staticmethod
    def _load_api_client(kube_config_path: Optional[str]) -> client.ApiClient:
        """加载 Kubernetes 配置：指定的 kubeconfig、默认 kubeconfig、in-cluster 依次尝试"""
        if kube_config_path:
            return config.new_client_from_config(config_file=kube_config_path)

        try:
            return config.new_client_from_config()
        except (config.ConfigException, OSError):
            pass

        try:
            configuration = client.Configuration()
            config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes config")
            return client.ApiClient(configuration)
        except config.ConfigException as e:
            raise KubernetesError(
                "No usable Kubernetes configuration found",
                original_error=e,
            ) from e

    def _build_pod(self, handle: SandboxHandle, command: str) -> V1Pod:
        """构建单容器 Pod"""
        return V1Pod(
            api_version="v1",
            kind="Pod",
            metadata=V1ObjectMeta(
                name=handle.name,
                namespace=handle.namespace,
                labels={
                    "app": "task-runner",
                    "task-runner/sandbox": "true",
                },
            ),
            spec=V1PodSpec(
                containers=[
                    V1Container(
                        name=CONTAINER_NAME,
                        image=self._image,
                        image_pull_policy="IfNotPresent",
                        command=["/bin/sh"],
                        args=["-c", command],
                    )
                ],
                restart_policy="Never",
            ),
        )

    async def create_execution_unit(self, handle: SandboxHandle, command: str) -> None:
        """创建 Pod"""
        pod = self._build_pod(handle, command)
        try:
            await asyncio.to_thread(
                self._core_v1.create_namespaced_pod,
                namespace=handle.namespace,
                body=pod,
            )
        except ApiException as e:
            logger.error(
                "Failed to create pod",
                sandbox=handle.name,
                namespace=handle.namespace,
                status=e.status,
                reason=e.reason,
            )
            raise ProvisionFailure(describe_api_exception(e), original_error=e) from e
        except Exception as e:
            raise ProvisionFailure(str(e), original_error=e) from e

    async def get_status(self, handle: SandboxHandle) -> SandboxPhase:
        """读取 Pod phase，status 或 phase 尚未填充时返回 UNKNOWN"""
        try:
            pod = await asyncio.to_thread(
                self._core_v1.read_namespaced_pod_status,
                name=handle.name,
                namespace=handle.namespace,
            )
        except ApiException as e:
            logger.error(
                "Failed to read pod status",
                sandbox=handle.name,
                status=e.status,
                reason=e.reason,
            )
            raise ObservationFailure(describe_api_exception(e), original_error=e) from e
        except Exception as e:
            raise ObservationFailure(str(e), original_error=e) from e

        if pod is None or pod.status is None:
            return SandboxPhase.UNKNOWN
        return SandboxPhase.from_pod_phase(pod.status.phase)

    async def get_output(self, handle: SandboxHandle) -> str:
        """读取 Pod 日志（stdout 与 stderr 合并）"""
        try:
            logs = await asyncio.to_thread(
                self._core_v1.read_namespaced_pod_log,
                name=handle.name,
                namespace=handle.namespace,
                container=CONTAINER_NAME,
            )
        except ApiException as e:
            raise RetrievalFailure(describe_api_exception(e), original_error=e) from e
        except Exception as e:
            raise RetrievalFailure(str(e), original_error=e) from e
        return logs or ""

    async def delete(self, handle: SandboxHandle) -> None:
        """立即删除 Pod，Pod 不存在时视为成功"""
        try:
            await asyncio.to_thread(
                self._core_v1.delete_namespaced_pod,
                name=handle.name,
                namespace=handle.namespace,
                grace_period_seconds=0,
            )
        except ApiException as e:
            if e.status == 404:
                logger.debug("Pod already gone", sandbox=handle.name)
                return
            raise CleanupFailure(describe_api_exception(e), original_error=e) from e
        except Exception as e:
            raise CleanupFailure(str(e), original_error=e) from e

    async def ping(self) -> bool:
        """
        检查 Kubernetes 连接状态

        只列出命名空间内的 Pod，不需要集群级别权限。
        """
        try:
            await asyncio.to_thread(
                self._core_v1.list_namespaced_pod,
                self._namespace,
                limit=1,
            )
            return True
        except Exception as e:
            logger.error("Kubernetes ping failed", error=str(e))
            return False

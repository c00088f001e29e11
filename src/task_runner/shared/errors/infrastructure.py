"""
基础设施错误

定义基础设施层的错误类型。

沙箱相关错误（SandboxError 及其子类）不会传播到 API 层，
由 SandboxProvisioner 转换为执行记录中的输出文本。
"""
from typing import Optional


class InfrastructureError(Exception):
    """基础设施错误基类"""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class DatabaseError(InfrastructureError):
    """数据库错误"""
    pass


class KubernetesError(InfrastructureError):
    """Kubernetes 错误"""
    pass


class SandboxError(KubernetesError):
    """沙箱平台错误基类"""
    pass


class ProvisionFailure(SandboxError):
    """平台拒绝创建沙箱"""
    pass


class ObservationFailure(SandboxError):
    """轮询沙箱状态失败"""
    pass


class RetrievalFailure(SandboxError):
    """获取沙箱输出失败"""
    pass


class SandboxInterrupted(SandboxError):
    """等待过程被外部中断（如进程关闭）"""
    pass


class SandboxTimeout(SandboxError):
    """超过最大等待时间"""

    def __init__(
        self,
        message: str,
        timeout_seconds: float,
        original_error: Optional[Exception] = None
    ):
        self.timeout_seconds = timeout_seconds
        super().__init__(message, original_error)


class CleanupFailure(SandboxError):
    """删除沙箱失败（只记录日志，不影响执行结果）"""
    pass

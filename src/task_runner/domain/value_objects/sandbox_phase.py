"""
沙箱阶段值对象

对应 Kubernetes Pod 的 status.phase。
"""
from enum import Enum
from typing import Optional


class SandboxPhase(str, Enum):
    """沙箱阶段枚举"""
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    UNKNOWN = "unknown"

    def is_terminal(self) -> bool:
        """是否为终态（不会再变化）"""
        return self in {SandboxPhase.SUCCEEDED, SandboxPhase.FAILED}

    @classmethod
    def from_pod_phase(cls, phase: Optional[str]) -> "SandboxPhase":
        """从 Pod phase（如 "Succeeded"）转换，未知值映射为 UNKNOWN"""
        if not phase:
            return cls.UNKNOWN
        try:
            return cls(phase.lower())
        except ValueError:
            return cls.UNKNOWN

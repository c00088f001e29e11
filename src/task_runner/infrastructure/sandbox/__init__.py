"""
沙箱平台实现
"""
from task_runner.infrastructure.sandbox.k8s_sandbox_platform import K8sSandboxPlatform

__all__ = ["K8sSandboxPlatform"]

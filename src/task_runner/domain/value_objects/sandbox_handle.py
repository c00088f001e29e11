"""
沙箱句柄值对象

标识一次执行所使用的临时沙箱。句柄只在一次 SandboxProvisioner.run
调用内有效，不复用，也不持久化。
"""
import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class SandboxHandle:
    """沙箱句柄（不可变）"""
    name: str
    namespace: str

    def __post_init__(self):
        """初始化后验证"""
        if not self.name:
            raise ValueError("name cannot be empty")
        if not self.namespace:
            raise ValueError("namespace cannot be empty")

    @classmethod
    def generate(cls, namespace: str, prefix: str = "task-runner") -> "SandboxHandle":
        """
        生成新的沙箱句柄

        名称由前缀和 uuid4 组成，符合 Kubernetes DNS 子域名规则
        （小写字母、数字和 '-'，最多 253 字符）。
        """
        prefix = "".join(c if c.isalnum() else "-" for c in prefix.lower()).strip("-")
        name = f"{prefix}-{uuid.uuid4()}" if prefix else str(uuid.uuid4())
        return cls(name=name[:253], namespace=namespace)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"

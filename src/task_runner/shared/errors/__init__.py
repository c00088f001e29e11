"""
错误定义

领域错误与基础设施错误。
"""
from task_runner.shared.errors.domain import (
    DomainError,
    NotFoundError,
    ValidationError,
)
from task_runner.shared.errors.infrastructure import (
    InfrastructureError,
    DatabaseError,
    KubernetesError,
    SandboxError,
    ProvisionFailure,
    ObservationFailure,
    RetrievalFailure,
    SandboxInterrupted,
    SandboxTimeout,
    CleanupFailure,
)

__all__ = [
    "DomainError",
    "NotFoundError",
    "ValidationError",
    "InfrastructureError",
    "DatabaseError",
    "KubernetesError",
    "SandboxError",
    "ProvisionFailure",
    "ObservationFailure",
    "RetrievalFailure",
    "SandboxInterrupted",
    "SandboxTimeout",
    "CleanupFailure",
]

from task_runner.application.services.sandbox_provisioner import (
    ProvisionResult,
    SandboxProvisioner,
)
from task_runner.application.services.execution_supervisor import ExecutionSupervisor
from task_runner.application.services.task_service import TaskService

__all__ = [
    "ProvisionResult",
    "SandboxProvisioner",
    "ExecutionSupervisor",
    "TaskService",
]

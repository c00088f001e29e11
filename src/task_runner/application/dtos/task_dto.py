"""
任务 DTO

定义任务数据传输对象。
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from task_runner.domain.entities.task import Task
from task_runner.domain.value_objects.execution_record import ExecutionRecord


@dataclass
class ExecutionRecordDTO:
    """执行记录数据传输对象"""
    start_time: datetime
    end_time: datetime
    output: str
    duration_seconds: float

    @classmethod
    def from_value(cls, record: ExecutionRecord) -> "ExecutionRecordDTO":
        """从值对象创建 DTO"""
        return cls(
            start_time=record.start_time,
            end_time=record.end_time,
            output=record.output,
            duration_seconds=record.duration_seconds,
        )


@dataclass
class TaskDTO:
    """任务数据传输对象"""
    id: str
    name: str
    owner: str
    command: str
    executions: List[ExecutionRecordDTO] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, task: Task) -> "TaskDTO":
        """从领域实体创建 DTO"""
        return cls(
            id=task.id,
            name=task.name,
            owner=task.owner,
            command=task.command,
            executions=[ExecutionRecordDTO.from_value(r) for r in task.executions],
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

"""
任务实体

一个具名的 shell 命令及其执行历史。
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from task_runner.domain.value_objects.execution_record import ExecutionRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """
    任务实体

    executions 按插入顺序保存执行记录，插入顺序即时间顺序，只追加。
    """
    id: str
    name: str
    owner: str
    command: str
    executions: List[ExecutionRecord] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        """初始化后验证"""
        if not self.id:
            raise ValueError("id cannot be empty")

    # ============== 领域行为 ==============

    def append_execution(self, record: ExecutionRecord) -> None:
        """追加执行记录，不重排也不去重"""
        self.executions.append(record)
        self.updated_at = _utcnow()

    def update_definition(self, name: str, owner: str, command: str) -> None:
        """更新任务定义，执行历史保持不变"""
        self.name = name
        self.owner = owner
        self.command = command
        self.updated_at = _utcnow()

    # ============== 领域查询 ==============

    @property
    def last_execution(self) -> Optional[ExecutionRecord]:
        """最近一次执行记录"""
        return self.executions[-1] if self.executions else None

    def has_record(self, record_id: str) -> bool:
        """是否已包含指定执行记录"""
        return any(r.id == record_id for r in self.executions)

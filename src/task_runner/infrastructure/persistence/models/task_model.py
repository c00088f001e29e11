"""
任务 ORM 模型

SQLAlchemy 模型定义，用于数据库持久化。
按照数据表命名规范: t_{module}_{entity}, f_{field_name}
"""
from datetime import datetime, timezone
from typing import List

from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from task_runner.infrastructure.persistence.database import Base
from task_runner.infrastructure.persistence.models.execution_record_model import ExecutionRecordModel
from task_runner.infrastructure.persistence.utils.timestamp_helper import datetime_to_millis, millis_to_datetime


class TaskModel(Base):
    """
    任务 ORM 模型 - t_task_runner_task

    这是基础设施层的实现细节，映射到数据库表。
    """
    __tablename__ = "t_task_runner_task"

    f_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    f_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    f_owner: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    f_command: Mapped[str] = mapped_column(Text, nullable=False)

    # Timestamps (BIGINT - millisecond timestamps)
    f_created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    f_updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    executions: Mapped[List[ExecutionRecordModel]] = relationship(
        order_by=[ExecutionRecordModel.f_start_time, ExecutionRecordModel.f_seq],
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        Index("t_task_runner_task_idx_name", "f_name"),
        Index("t_task_runner_task_idx_owner", "f_owner"),
    )

    def to_entity(self):
        """转换为领域实体"""
        from task_runner.domain.entities.task import Task

        return Task(
            id=self.f_id,
            name=self.f_name,
            owner=self.f_owner,
            command=self.f_command,
            executions=[m.to_value() for m in self.executions],
            created_at=millis_to_datetime(self.f_created_at) or datetime.now(timezone.utc),
            updated_at=millis_to_datetime(self.f_updated_at) or datetime.now(timezone.utc),
        )

    @classmethod
    def from_entity(cls, task):
        """从领域实体创建 ORM 模型（不含执行记录）"""
        return cls(
            f_id=task.id,
            f_name=task.name,
            f_owner=task.owner,
            f_command=task.command,
            f_created_at=datetime_to_millis(task.created_at),
            f_updated_at=datetime_to_millis(task.updated_at),
        )

    def apply_entity(self, task) -> None:
        """用领域实体更新任务字段（执行记录另行追加）"""
        self.f_name = task.name
        self.f_owner = task.owner
        self.f_command = task.command
        self.f_updated_at = datetime_to_millis(task.updated_at)

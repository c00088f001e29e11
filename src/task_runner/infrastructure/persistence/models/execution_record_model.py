"""
执行记录 ORM 模型

执行记录只插入，不更新；随所属任务级联删除。
"""
from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from task_runner.infrastructure.persistence.database import Base
from task_runner.infrastructure.persistence.utils.timestamp_helper import datetime_to_micros, micros_to_datetime


class ExecutionRecordModel(Base):
    """
    执行记录 ORM 模型 - t_task_runner_execution
    """
    __tablename__ = "t_task_runner_execution"

    f_id: Mapped[str] = mapped_column(String(40), primary_key=True)
    f_task_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("t_task_runner_task.f_id", ondelete="CASCADE"),
        nullable=False,
    )
    # 同一任务内的追加顺序，开始时间相同时用于排序
    f_seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # 微秒时间戳，保留执行记录的时间精度
    f_start_time: Mapped[int] = mapped_column(BigInteger, nullable=False)
    f_end_time: Mapped[int] = mapped_column(BigInteger, nullable=False)
    f_output: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        Index("t_task_runner_execution_idx_task_id", "f_task_id"),
        Index("t_task_runner_execution_idx_start_time", "f_start_time"),
    )

    def to_value(self):
        """转换为值对象"""
        from task_runner.domain.value_objects.execution_record import ExecutionRecord

        return ExecutionRecord(
            id=self.f_id,
            start_time=micros_to_datetime(self.f_start_time),
            end_time=micros_to_datetime(self.f_end_time),
            output=self.f_output or "",
        )

    @classmethod
    def from_value(cls, task_id: str, record, seq: int = 0):
        """从值对象创建 ORM 模型"""
        return cls(
            f_id=record.id,
            f_task_id=task_id,
            f_seq=seq,
            f_start_time=datetime_to_micros(record.start_time),
            f_end_time=datetime_to_micros(record.end_time),
            f_output=record.output,
        )

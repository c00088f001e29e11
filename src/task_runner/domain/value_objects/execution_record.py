"""
执行记录值对象

一次任务执行的历史记录：开始时间、结束时间、输出。创建后不可变，
只属于其所在的任务。
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ExecutionRecord:
    """
    执行记录（不可变）

    id 只用于持久化时的追加去重，不对外引用。
    """
    start_time: datetime
    end_time: datetime
    output: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        """初始化后验证"""
        if self.start_time is None or self.end_time is None:
            raise ValueError("start_time and end_time are required")
        if self.end_time < self.start_time:
            raise ValueError("end_time cannot be earlier than start_time")

    @property
    def duration_seconds(self) -> float:
        """执行耗时（秒）"""
        return (self.end_time - self.start_time).total_seconds()


def build_execution_record(
    start_time: datetime,
    end_time: datetime,
    output: Optional[str],
) -> ExecutionRecord:
    """组装执行记录，output 为 None 时记为空字符串"""
    return ExecutionRecord(
        start_time=start_time,
        end_time=end_time,
        output=output or "",
    )

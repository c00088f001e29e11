"""
执行任务命令
"""
from dataclasses import dataclass


@dataclass
class ExecuteTaskCommand:
    """执行任务命令"""
    task_id: str

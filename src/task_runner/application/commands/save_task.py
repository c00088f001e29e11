"""
保存任务命令

创建或更新任务定义的命令 DTO。
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class SaveTaskCommand:
    """保存任务命令（task_id 为空时创建新任务）"""
    name: str
    owner: str
    command: Optional[str]
    task_id: Optional[str] = None

"""
查询任务

按 ID 或名称子串筛选任务的查询 DTO。
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class FindTasksQuery:
    """任务查询（两个条件都为空时返回全部任务）"""
    task_id: Optional[str] = None
    name_contains: Optional[str] = None
    limit: int = 100
    offset: int = 0

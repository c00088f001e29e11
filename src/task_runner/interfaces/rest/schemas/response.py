"""
REST API 响应模式

定义 FastAPI 的响应 Pydantic 模型。
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ExecutionRecordResponse(BaseModel):
    """执行记录响应"""
    start_time: datetime
    end_time: datetime
    output: str
    duration_seconds: float


class TaskResponse(BaseModel):
    """任务响应"""
    id: str
    name: str
    owner: str
    command: str
    executions: List[ExecutionRecordResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str
    version: str
    uptime: float


class ErrorResponse(BaseModel):
    """错误响应"""
    error: str
    message: str
    detail: Optional[str] = None

"""
REST API 请求模式

定义 FastAPI 的请求 Pydantic 模型。
"""
from typing import Optional

from pydantic import BaseModel, Field


class SaveTaskRequest(BaseModel):
    """
    创建或更新任务请求

    id 为空时创建新任务；command 的安全校验由应用层完成，校验失败返回 400。
    """
    id: Optional[str] = Field(None, max_length=64, description="任务 ID（为空时自动生成）")
    name: str = Field("", max_length=255, description="任务名称")
    owner: str = Field("", max_length=128, description="任务所有者")
    command: Optional[str] = Field(None, description="shell 命令，在 /bin/sh -c 中执行")

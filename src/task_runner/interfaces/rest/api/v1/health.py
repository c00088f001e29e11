"""
健康检查 REST API 路由
"""
import time

from fastapi import APIRouter

from task_runner import __version__
from task_runner.interfaces.rest.schemas.response import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])

# 应用启动时间
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    健康检查端点

    返回系统状态和运行时间。
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime=time.time() - _start_time,
    )

"""
任务 REST API 路由

定义任务的增删查和执行端点。
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from task_runner.application.commands.execute_task import ExecuteTaskCommand
from task_runner.application.commands.save_task import SaveTaskCommand
from task_runner.application.dtos.task_dto import TaskDTO
from task_runner.application.queries.find_tasks import FindTasksQuery
from task_runner.application.services.execution_supervisor import ExecutionSupervisor
from task_runner.application.services.task_service import TaskService
from task_runner.infrastructure.dependencies import get_execution_supervisor, get_task_service
from task_runner.interfaces.rest.schemas.request import SaveTaskRequest
from task_runner.interfaces.rest.schemas.response import (
    ErrorResponse,
    ExecutionRecordResponse,
    TaskResponse,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "",
    response_model=List[TaskResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_tasks(
    id: Optional[str] = Query(None, description="按任务 ID 查询"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: TaskService = Depends(get_task_service),
):
    """
    列出任务

    - 不带参数：返回全部任务（分页）
    - **id**: 只返回该任务，不存在时 404
    """
    query = FindTasksQuery(task_id=id, limit=limit, offset=offset)
    tasks = await service.find_tasks(query)
    return [_map_dto_to_response(t) for t in tasks]


@router.get(
    "/findByName",
    response_model=List[TaskResponse],
    responses={404: {"model": ErrorResponse}},
)
async def find_tasks_by_name(
    name: str = Query(..., description="名称子串"),
    service: TaskService = Depends(get_task_service),
):
    """按名称子串查询任务，没有匹配时 404"""
    tasks = await service.find_tasks(FindTasksQuery(name_contains=name))
    return [_map_dto_to_response(t) for t in tasks]


@router.put(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def save_task(
    request: SaveTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """
    创建或更新任务

    - **id**: 任务 ID（可选，已存在时更新定义并保留执行历史）
    - **name**: 任务名称
    - **owner**: 任务所有者
    - **command**: shell 命令（空命令或包含 `rm `、`sudo` 时返回 400）
    """
    command = SaveTaskCommand(
        task_id=request.id,
        name=request.name,
        owner=request.owner,
        command=request.command,
    )
    task_dto = await service.save_task(command)
    return _map_dto_to_response(task_dto)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """删除任务及其执行历史"""
    await service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{task_id}/execute",
    response_model=TaskResponse,
    responses={404: {"model": ErrorResponse}},
)
async def execute_task(
    task_id: str,
    supervisor: ExecutionSupervisor = Depends(get_execution_supervisor),
):
    """
    在新的 Pod 中执行任务命令

    平台错误不会导致请求失败，诊断信息写入新执行记录的 output。
    """
    task_dto = await supervisor.execute(ExecuteTaskCommand(task_id=task_id))
    return _map_dto_to_response(task_dto)


def _map_dto_to_response(dto: TaskDTO) -> TaskResponse:
    """将 TaskDTO 映射为 TaskResponse"""
    return TaskResponse(
        id=dto.id,
        name=dto.name,
        owner=dto.owner,
        command=dto.command,
        executions=[
            ExecutionRecordResponse(
                start_time=r.start_time,
                end_time=r.end_time,
                output=r.output,
                duration_seconds=r.duration_seconds,
            )
            for r in dto.executions
        ],
        created_at=dto.created_at,
        updated_at=dto.updated_at,
    )

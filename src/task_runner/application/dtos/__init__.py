from task_runner.application.dtos.task_dto import TaskDTO, ExecutionRecordDTO

__all__ = ["TaskDTO", "ExecutionRecordDTO"]

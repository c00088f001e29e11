from task_runner.application.queries.find_tasks import FindTasksQuery

__all__ = ["FindTasksQuery"]

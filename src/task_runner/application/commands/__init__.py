from task_runner.application.commands.save_task import SaveTaskCommand
from task_runner.application.commands.execute_task import ExecuteTaskCommand

__all__ = ["SaveTaskCommand", "ExecuteTaskCommand"]

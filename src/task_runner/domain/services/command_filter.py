"""
命令安全过滤

在任务入库前拒绝明显危险的命令：空命令、递归删除（"rm "）、
提权（"sudo"）。

注意：这只是一个浅层的子串黑名单，并不能保证命令安全。
它无法识别间接写法，例如 `find / -delete`、`xargs rm`（无空格后缀时）、
`$(echo r)m -rf /`、通过变量或 base64 解码后再执行的命令。
真正的隔离依赖一次性的沙箱 Pod，而不是这个过滤器。
"""
from typing import Optional

from task_runner.shared.errors.domain import ValidationError

DENIED_COMMAND_MARKERS = (
    "rm ",   # 递归/强制删除
    "sudo",  # 以超级用户运行
)


def is_command_safe(command: Optional[str]) -> bool:
    """命令是否通过过滤（纯函数）"""
    if command is None or not command.strip():
        return False
    return not any(marker in command for marker in DENIED_COMMAND_MARKERS)


def validate_command(command: Optional[str]) -> str:
    """校验命令，未通过时抛出 ValidationError"""
    if command is None or not command.strip():
        raise ValidationError("Command cannot be empty")

    for marker in DENIED_COMMAND_MARKERS:
        if marker in command:
            raise ValidationError(
                f"Command contains a denied marker: {marker.strip()!r}",
                details={"marker": marker.strip()},
            )
    return command

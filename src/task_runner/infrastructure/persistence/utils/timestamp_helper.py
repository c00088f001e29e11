"""
时间戳辅助工具

用于在 BIGINT 时间戳和 datetime 对象之间进行转换。
任务的审计字段使用毫秒时间戳；执行记录使用微秒时间戳，保留完整精度。
读出的 datetime 一律带 UTC 时区，写入时 naive datetime 按本地时间解释。
"""
import time
from datetime import datetime, timezone
from typing import Optional


def datetime_to_millis(dt: Optional[datetime]) -> int:
    """
    将 datetime 对象转换为毫秒时间戳

    Args:
        dt: datetime 对象，如果为 None 则返回当前时间的毫秒时间戳

    Returns:
        毫秒时间戳
    """
    if dt is None:
        return int(time.time() * 1000)
    return int(dt.timestamp() * 1000)


def millis_to_datetime(millis: Optional[int]) -> Optional[datetime]:
    """
    将毫秒时间戳转换为 UTC datetime 对象

    Args:
        millis: 毫秒时间戳，如果为 None 或 0 则返回 None

    Returns:
        datetime 对象，如果输入无效则返回 None
    """
    if not millis:
        return None
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ValueError, OSError):
        return None


def datetime_to_micros(dt: datetime) -> int:
    """datetime 转微秒时间戳（整数运算，避免浮点误差）"""
    return int(dt.replace(microsecond=0).timestamp()) * 1_000_000 + dt.microsecond


def micros_to_datetime(micros: int) -> datetime:
    """微秒时间戳转 UTC datetime"""
    seconds, remainder = divmod(micros, 1_000_000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=remainder)

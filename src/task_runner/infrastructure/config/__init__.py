"""
配置

导出应用配置。
"""
from task_runner.infrastructure.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

"""
Logging infrastructure for Sandbox Task Runner.

Exports logging configuration and utilities.
"""

from task_runner.infrastructure.logging.logging_config import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]

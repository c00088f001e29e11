"""
Sandbox Task Runner

在一次性 Kubernetes Pod 中执行已注册的 shell 命令，并记录执行历史。
"""

__version__ = "0.1.0"

"""
沙箱句柄与阶段值对象单元测试
"""
import re

import pytest

from task_runner.domain.value_objects.sandbox_handle import SandboxHandle
from task_runner.domain.value_objects.sandbox_phase import SandboxPhase

DNS_SUBDOMAIN = re.compile(r"^[a-z0-9]([-a-z0-9.]*[a-z0-9])?$")


class TestSandboxHandle:
    """沙箱句柄测试"""

    def test_generate(self):
        handle = SandboxHandle.generate("default")

        assert handle.namespace == "default"
        assert handle.name.startswith("task-runner-")
        assert DNS_SUBDOMAIN.match(handle.name)

    def test_generate_unique(self):
        names = {SandboxHandle.generate("default").name for _ in range(50)}
        assert len(names) == 50

    def test_generate_sanitizes_prefix(self):
        handle = SandboxHandle.generate("jobs", prefix="My_Tasks!")

        assert handle.name.startswith("my-tasks-")
        assert DNS_SUBDOMAIN.match(handle.name)

    def test_generate_length_limit(self):
        handle = SandboxHandle.generate("default", prefix="x" * 300)
        assert len(handle.name) <= 253

    @pytest.mark.parametrize("name,namespace", [("", "default"), ("pod", "")])
    def test_empty_fields(self, name, namespace):
        with pytest.raises(ValueError):
            SandboxHandle(name=name, namespace=namespace)

    def test_str(self):
        assert str(SandboxHandle(name="pod-1", namespace="jobs")) == "jobs/pod-1"


class TestSandboxPhase:
    """沙箱阶段测试"""

    @pytest.mark.parametrize("raw,expected", [
        ("Pending", SandboxPhase.PENDING),
        ("Running", SandboxPhase.RUNNING),
        ("Succeeded", SandboxPhase.SUCCEEDED),
        ("Failed", SandboxPhase.FAILED),
        ("Unknown", SandboxPhase.UNKNOWN),
        ("Evicted", SandboxPhase.UNKNOWN),
        (None, SandboxPhase.UNKNOWN),
        ("", SandboxPhase.UNKNOWN),
    ])
    def test_from_pod_phase(self, raw, expected):
        assert SandboxPhase.from_pod_phase(raw) is expected

    def test_terminal(self):
        assert SandboxPhase.SUCCEEDED.is_terminal()
        assert SandboxPhase.FAILED.is_terminal()
        assert not SandboxPhase.PENDING.is_terminal()
        assert not SandboxPhase.RUNNING.is_terminal()
        assert not SandboxPhase.UNKNOWN.is_terminal()

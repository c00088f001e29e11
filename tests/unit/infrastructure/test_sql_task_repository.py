"""
SQL 任务仓储单元测试

使用 aiosqlite 内存数据库。
"""
import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from task_runner.domain.value_objects.execution_record import ExecutionRecord
from task_runner.infrastructure.persistence.models.execution_record_model import ExecutionRecordModel
from task_runner.infrastructure.persistence.repositories.sql_task_repository import SqlTaskRepository
from tests.helpers import create_execution_record, create_mock_task


class TestSqlTaskRepository:
    """SQL 任务仓储测试"""

    @pytest.fixture
    def repo(self, db_session):
        return SqlTaskRepository(db_session)

    @pytest.mark.asyncio
    async def test_save_and_find(self, repo):
        """测试保存和查找"""
        saved = await repo.save(create_mock_task(task_id="t1", name="echo", command="echo hello"))

        assert saved.id == "t1"
        found = await repo.find_by_id("t1")
        assert found.name == "echo"
        assert found.owner == "ops"
        assert found.command == "echo hello"
        assert found.executions == []

    @pytest.mark.asyncio
    async def test_find_missing(self, repo):
        assert await repo.find_by_id("missing") is None
        assert await repo.exists_by_id("missing") is False

    @pytest.mark.asyncio
    async def test_execution_records_round_trip(self, repo):
        """执行记录保留微秒精度和顺序"""
        first = create_execution_record(output="first")
        second = create_execution_record(
            output="second",
            start_time=first.end_time + timedelta(microseconds=7),
        )
        task = create_mock_task(task_id="t1", executions=[first, second])

        saved = await repo.save(task)

        assert [r.output for r in saved.executions] == ["first", "second"]
        assert saved.executions[0].start_time == first.start_time
        assert saved.executions[0].end_time == first.end_time
        assert saved.executions[1].id == second.id

    @pytest.mark.asyncio
    async def test_save_inserts_only_missing_records(self, repo, db_session):
        task = create_mock_task(task_id="t1")
        task.append_execution(create_execution_record(output="first"))
        saved = await repo.save(task)

        saved.append_execution(create_execution_record(output="second"))
        saved = await repo.save(saved)

        count = await db_session.scalar(select(func.count()).select_from(ExecutionRecordModel))
        assert count == 2
        assert [r.output for r in saved.executions] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_stale_copy_does_not_drop_records(self, repo):
        """两个副本各自追加记录后保存，两条记录都保留"""
        await repo.save(create_mock_task(task_id="t1"))
        copy_a = await repo.find_by_id("t1")
        copy_b = await repo.find_by_id("t1")

        copy_a.append_execution(create_execution_record(output="a"))
        copy_b.append_execution(create_execution_record(
            output="b",
            start_time=datetime(2025, 1, 14, 10, 31, 0, tzinfo=timezone.utc),
        ))
        await repo.save(copy_a)
        saved = await repo.save(copy_b)

        assert [r.output for r in saved.executions] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_identical_start_times_keep_append_order(self, repo):
        start = datetime(2025, 1, 14, 10, 0, 0, tzinfo=timezone.utc)
        task = create_mock_task(task_id="t1", executions=[
            ExecutionRecord(start_time=start, end_time=start, output=str(i)) for i in range(3)
        ])

        saved = await repo.save(task)

        assert [r.output for r in saved.executions] == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_update_definition(self, repo):
        task = await repo.save(create_mock_task(task_id="t1", executions=[create_execution_record()]))

        task.update_definition(name="renamed", owner="dev", command="date")
        await repo.save(task)

        found = await repo.find_by_id("t1")
        assert found.name == "renamed"
        assert found.command == "date"
        assert len(found.executions) == 1

    @pytest.mark.asyncio
    async def test_find_by_name_containing(self, repo):
        await repo.save(create_mock_task(task_id="t1", name="backup-db"))
        await repo.save(create_mock_task(task_id="t2", name="nightly-backup"))
        await repo.save(create_mock_task(task_id="t3", name="echo"))

        result = await repo.find_by_name_containing("backup")

        assert sorted(t.id for t in result) == ["t1", "t2"]

    @pytest.mark.asyncio
    async def test_find_by_name_escapes_wildcards(self, repo):
        await repo.save(create_mock_task(task_id="t1", name="100% done"))
        await repo.save(create_mock_task(task_id="t2", name="100 done"))

        result = await repo.find_by_name_containing("0%")

        assert [t.id for t in result] == ["t1"]

    @pytest.mark.asyncio
    async def test_find_all_paginates(self, repo):
        for i in range(5):
            await repo.save(create_mock_task(task_id=f"t{i}"))

        assert len(await repo.find_all()) == 5
        assert len(await repo.find_all(offset=3, limit=10)) == 2
        assert len(await repo.find_all(offset=0, limit=2)) == 2

    @pytest.mark.asyncio
    async def test_delete_removes_records(self, repo, db_session):
        """删除任务时一并删除执行记录"""
        await repo.save(create_mock_task(task_id="t1", executions=[create_execution_record()]))

        await repo.delete_by_id("t1")

        assert await repo.exists_by_id("t1") is False
        assert await repo.find_by_id("t1") is None
        count = await db_session.scalar(select(func.count()).select_from(ExecutionRecordModel))
        assert count == 0

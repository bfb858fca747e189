import pytest

from core import scheduler
from core.scheduler import (
    execute_task,
    register_processor,
    unregister_processor,
    TaskOptions,
)


@pytest.fixture
def collected():
    """注册一个收集快照的后置处理器"""
    snapshots = []

    def collector(snapshot):
        snapshots.append(snapshot)

    register_processor(collector)
    yield snapshots
    unregister_processor(collector)


async def test_quote_task_runs_processors(collected, capsys):
    result = await execute_task("quote", TaskOptions(currency="USD", city="Mumbai"))

    assert result.success is True
    assert result.task_type == "quote"
    assert set(result.details) == {"XAU", "XAG"}
    assert result.details["XAU"]["source"] == "mock"
    assert [s.metal for s in collected] == ["XAU", "XAG"]
    assert "XAU/USD (Mumbai)" in capsys.readouterr().out


async def test_failing_processor_does_not_break_task(collected):
    def broken(snapshot):
        raise RuntimeError("boom")

    register_processor(broken)
    try:
        result = await execute_task("quote", TaskOptions(metals=("XAG",)))
    finally:
        unregister_processor(broken)

    assert result.success is True
    assert len(collected) == 1


def test_register_processor_is_idempotent():
    def noop(snapshot):
        pass

    register_processor(noop)
    register_processor(noop)
    assert scheduler._post_processors.count(noop) == 1
    unregister_processor(noop)
    assert noop not in scheduler._post_processors


async def test_history_task():
    result = await execute_task("history", TaskOptions(time_range="1W", metals=("XAU",)))

    assert result.success is True
    assert result.details == {"XAU": 8}


async def test_city_and_closing_tasks():
    cities = await execute_task("cities", TaskOptions(currency="AUD"))
    closing = await execute_task("closing", TaskOptions(city="Kolkata"))

    assert cities.success is True
    assert cities.details == {"cities": 12}
    assert closing.success is True
    assert closing.details == {"days": 10}


async def test_all_task():
    result = await execute_task("all")

    assert result.success is True
    assert set(result.details) == {"quote", "cities", "closing"}


async def test_invalid_options_reported_as_failure():
    result = await execute_task("quote", TaskOptions(currency="JPY"))

    assert result.success is False
    assert "不支持的货币" in result.message


async def test_unknown_task():
    result = await execute_task("backup")

    assert result.success is False
    assert "未知任务类型" in result.message

"""
测试离线检查循环
"""

import asyncio
import sys
from pathlib import Path

import pytest

# 添加项目路径到 sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from outage_agent.cache import LivenessCache
from outage_agent.checker import check_dead_assets, run_checker
from outage_agent.events import AssetEvent, MetricEvent


@pytest.fixture
def cache():
    """ups-1 在 t=10 过期，ups-2 在 t=100 过期"""
    cache = LivenessCache(default_ttl=50)
    for name in ("ups-2", "ups-1"):
        cache.ingest(
            AssetEvent(asset_name=name, operation="create", aux={"type": "device", "subtype": "ups"}),
            now_sec=0,
        )
    cache.ingest(MetricEvent(source_asset_name="ups-1", ttl_seconds=5), now_sec=0)
    return cache


class TestCheckDeadAssets:
    """单次检查"""

    def test_no_dead_assets_no_callback(self, cache):
        calls = []
        assert check_dead_assets(cache, calls.append, now_sec=5) == []
        assert calls == []

    def test_callback_receives_sorted_names(self, cache):
        calls = []
        result = check_dead_assets(cache, calls.append, now_sec=100)
        assert result == ["ups-1", "ups-2"]
        assert calls == [["ups-1", "ups-2"]]

    def test_partial(self, cache):
        calls = []
        assert check_dead_assets(cache, calls.append, now_sec=10) == ["ups-1"]
        assert calls == [["ups-1"]]

    def test_default_callback_logs(self, cache, caplog):
        """测试：默认回调记录 WARNING"""
        with caplog.at_level("WARNING", logger="outage_agent.checker"):
            check_dead_assets(cache, now_sec=100)
        assert "Asset 'ups-1' is not responding" in caplog.text
        assert "Asset 'ups-2' is not responding" in caplog.text


class TestRunChecker:
    """检查循环"""

    def test_loop_survives_callback_error(self, cache):
        """测试：回调出错后循环继续"""
        calls = []

        def on_dead(names):
            calls.append(names)
            if len(calls) == 1:
                raise RuntimeError("alert sink unavailable")

        async def scenario():
            task = asyncio.create_task(run_checker(cache, interval=0, on_dead=on_dead))
            while len(calls) < 2:
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(asyncio.wait_for(scenario(), timeout=5))
        # 真实时间远大于过期时间，两个资产都离线
        assert calls[0] == ["ups-1", "ups-2"]
        assert calls[1] == ["ups-1", "ups-2"]

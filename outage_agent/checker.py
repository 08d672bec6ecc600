"""
离线检查循环

每隔 interval 秒查询一次 dead_assets()，把结果交给告警回调。
回调决定怎么处理离线资产，这里默认只记日志。
"""

import asyncio
import logging
from typing import Callable, List, Optional

from .cache import LivenessCache, get_cache
from .config import get_config

logger = logging.getLogger(__name__)

DeadAssetsCallback = Callable[[List[str]], None]


def log_dead_assets(names: List[str]):
    """默认回调：逐个记录离线资产"""
    for name in names:
        logger.warning(f"Asset '{name}' is not responding")


def check_dead_assets(
    cache: LivenessCache,
    on_dead: Optional[DeadAssetsCallback] = None,
    now_sec: Optional[int] = None
) -> List[str]:
    """
    执行一次离线检查

    Args:
        cache: 存活缓存
        on_dead: 有离线资产时调用，参数为排序后的资产名列表
        now_sec: 检查时间，缺省为当前时间

    Returns:
        排序后的离线资产名列表
    """
    dead = sorted(cache.dead_assets(now_sec))
    if dead:
        (on_dead or log_dead_assets)(dead)
    logger.debug(f"Checked {len(cache)} assets, {len(dead)} not responding")
    return dead


async def run_checker(
    cache: Optional[LivenessCache] = None,
    interval: Optional[int] = None,
    on_dead: Optional[DeadAssetsCallback] = None
):
    """
    运行离线检查循环

    出错时记录日志，下一个周期继续。
    """
    if cache is None:
        cache = get_cache()
    if interval is None:
        interval = get_config().checker.interval

    logger.info(f"Starting checker loop (interval={interval}s)")

    while True:
        try:
            check_dead_assets(cache, on_dead)
            await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info("Checker task cancelled")
            raise
        except Exception as e:
            logger.error(f"Checker loop error: {e}", exc_info=True)
            await asyncio.sleep(interval)

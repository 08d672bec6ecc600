"""
存活缓存

按资产名维护 ExpirationEntry：
- 资产事件负责创建/删除条目
- 指标事件负责收紧 TTL、推进最后看到的时间
- dead_assets() 按当前时间计算哪些资产已经沉默超过宽限期

所有操作都是同步的，不做 I/O，也不加锁：调用方负责串行访问
（agent 中 API 和检查循环运行在同一个事件循环里）。
"""

import logging
import time
from typing import Dict, List, Optional, Set, Union

from .config import CacheConfig, DEFAULT_ASSET_EXPIRATION_TIME_SEC, get_config
from .events import AssetEvent, MetricEvent
from .expiration import ExpirationEntry

logger = logging.getLogger(__name__)

# 只跟踪能报告离线的设备
TRACKED_DEVICE_TYPE = "device"
TRACKED_DEVICE_SUBTYPES = frozenset({"ups", "epdu", "sensor"})


def now_seconds() -> int:
    """当前 UNIX 时间（秒）"""
    return int(time.time())


class LivenessCache:
    """
    存活缓存

    管理：
    - entries: {asset_name: ExpirationEntry}
    - default_ttl: 新建条目的初始 TTL
    - verbose: 只影响调试日志
    """

    def __init__(self, default_ttl: int = DEFAULT_ASSET_EXPIRATION_TIME_SEC, verbose: bool = False):
        if default_ttl < 0:
            raise ValueError(f"default ttl must be non-negative, got {default_ttl}")
        self._entries: Dict[str, ExpirationEntry] = {}
        self._default_ttl = default_ttl
        self._verbose = verbose

    @classmethod
    def from_config(cls, config: CacheConfig) -> "LivenessCache":
        return cls(default_ttl=config.default_ttl, verbose=config.verbose)

    # ------------------------------------------------------------------
    # 配置
    # ------------------------------------------------------------------

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def get_default_ttl(self) -> int:
        """新加入资产的默认 TTL（秒）"""
        return self._default_ttl

    def set_default_ttl(self, seconds: int):
        """设置默认 TTL，只影响之后创建的条目"""
        if seconds < 0:
            raise ValueError(f"default ttl must be non-negative, got {seconds}")
        self._default_ttl = seconds

    @property
    def verbose(self) -> bool:
        return self._verbose

    def set_verbose(self, verbose: bool):
        self._verbose = verbose

    # ------------------------------------------------------------------
    # 写入
    # ------------------------------------------------------------------

    def ingest(self, event: Union[MetricEvent, AssetEvent], now_sec: Optional[int] = None):
        """
        唯一的写入入口，按事件类型分派

        Args:
            event: 已解码的事件
            now_sec: 处理时间，缺省为当前时间
        """
        if now_sec is None:
            now_sec = now_seconds()

        if isinstance(event, MetricEvent):
            self._ingest_metric(event, now_sec)
        elif isinstance(event, AssetEvent):
            self._ingest_asset(event, now_sec)
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def _ingest_metric(self, event: MetricEvent, now_sec: int):
        entry = self._entries.get(event.source_asset_name)
        if entry is None:
            # 未知资产不关心
            if self._verbose:
                logger.debug(f"metric for unknown asset '{event.source_asset_name}', ignored")
            return

        entry.tighten_ttl(event.ttl_seconds, self._verbose)

        timestamp = event.timestamp_seconds
        if timestamp is None:
            timestamp = now_sec

        if timestamp > now_sec:
            logger.info(
                f"got metric '{event.source_asset_name}@{event.quantity}' from future "
                f"(timestamp={timestamp}, now={now_sec}), ignore it"
            )
            return

        entry.advance_last_seen(timestamp, self._verbose)

    def _ingest_asset(self, event: AssetEvent, now_sec: int):
        asset_name = event.asset_name
        if self._verbose:
            logger.debug(f"asset: name={asset_name}, operation={event.operation}")

        if event.is_removal:
            self.delete(asset_name)
            return

        if event.aux.type != TRACKED_DEVICE_TYPE or event.aux.subtype not in TRACKED_DEVICE_SUBTYPES:
            return

        if asset_name in self._entries:
            # 已知资产：不更新属性
            return

        entry = ExpirationEntry.create(self._default_ttl, event)
        entry.advance_last_seen(now_sec, self._verbose)
        self._entries[asset_name] = entry
        logger.info(f"Tracking asset '{asset_name}' ({event.aux.subtype})")
        if self._verbose:
            logger.debug(f"asset: ADDED: name='{asset_name}', now={now_sec}s, expires_at={entry.expires_at()}s")

    def delete(self, asset_name: str):
        """移除资产（不存在时什么都不做）"""
        if self._entries.pop(asset_name, None) is not None:
            logger.info(f"Stopped tracking asset '{asset_name}'")

    def clear(self):
        self._entries.clear()

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def dead_assets(self, now_sec: Optional[int] = None) -> Set[str]:
        """返回过期时间 <= now 的所有资产名（无序）"""
        if now_sec is None:
            now_sec = now_seconds()
        if self._verbose:
            logger.debug(f"now={now_sec}s")

        dead = set()
        for asset_name, entry in self._entries.items():
            if self._verbose:
                logger.debug(f"asset: name={asset_name}, ttl={entry.ttl_sec}, expires_at={entry.expires_at()}")
            if entry.is_dead(now_sec):
                dead.add(asset_name)
        return dead

    def sensors_on_port(self, port: str, parent_name: str) -> List[str]:
        """返回挂在 parent_name 设备 port 口上的资产名（无序，可能为空）"""
        return [
            asset_name
            for asset_name, entry in self._entries.items()
            if entry.port == port and entry.parent_name == parent_name
        ]

    def get(self, asset_name: str) -> Optional[ExpirationEntry]:
        return self._entries.get(asset_name)

    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, asset_name: object) -> bool:
        return asset_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# 全局缓存实例（延迟创建）
_cache: Optional[LivenessCache] = None


def get_cache() -> LivenessCache:
    """获取全局缓存实例（按配置创建）"""
    global _cache
    if _cache is None:
        _cache = LivenessCache.from_config(get_config().cache)
    return _cache


def reset_cache():
    """重置缓存（主要用于测试）"""
    global _cache
    _cache = None

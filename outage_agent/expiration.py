"""
单个资产的过期状态

记录资产上报过的最小 TTL 和最后一次被看到的时间，
过期时间 = last_seen + 2 * ttl（容忍一个周期的抖动）。
"""

import logging
from typing import Any, Dict

from .events import AssetEvent

logger = logging.getLogger(__name__)


class ExpirationEntry:
    """
    资产过期条目

    - ttl_sec: 见过的最小 TTL（只减不增）
    - last_seen_sec: 最后看到的时间（只增不减）
    - snapshot: 创建时的资产事件副本（用于 port/parent 查询）
    """

    def __init__(self, ttl_sec: int, snapshot: AssetEvent):
        if ttl_sec < 0:
            raise ValueError(f"ttl must be non-negative, got {ttl_sec}")
        self.ttl_sec = ttl_sec
        self.last_seen_sec = 0
        self.snapshot = snapshot

    @classmethod
    def create(cls, default_ttl: int, snapshot: AssetEvent) -> "ExpirationEntry":
        """创建新条目，快照深拷贝后归条目独占"""
        return cls(default_ttl, snapshot.model_copy(deep=True))

    def advance_last_seen(self, candidate_sec: int, verbose: bool = False):
        """
        推进最后看到的时间

        只允许向前推进：例如 03:33 收到一个 24h 平均值指标，时间戳是 00:00，
        如果直接覆盖，过期时间会倒退到过去，产生误报。
        """
        if candidate_sec > self.last_seen_sec:
            self.last_seen_sec = candidate_sec
        if verbose:
            logger.debug(f"last_seen[s]: {self.last_seen_sec}")

    def tighten_ttl(self, candidate_ttl: int, verbose: bool = False):
        """取最小 TTL：同一资产多个指标周期不同时，按最短的周期告警"""
        if candidate_ttl < self.ttl_sec:
            self.ttl_sec = candidate_ttl
        if verbose:
            logger.debug(f"ttl[s]: {self.ttl_sec}")

    def expires_at(self) -> int:
        return self.last_seen_sec + 2 * self.ttl_sec

    def is_dead(self, now_sec: int) -> bool:
        return self.expires_at() <= now_sec

    @property
    def port(self) -> str:
        return self.snapshot.port

    @property
    def parent_name(self) -> str:
        return self.snapshot.parent_name

    def to_dict(self) -> Dict[str, Any]:
        """转换为 API 响应用的字典"""
        return {
            "ttl_sec": self.ttl_sec,
            "last_seen_sec": self.last_seen_sec,
            "expires_at": self.expires_at(),
            "port": self.port,
            "parent_name": self.parent_name,
        }

    def __repr__(self) -> str:
        return (
            f"ExpirationEntry(name={self.snapshot.asset_name!r}, ttl_sec={self.ttl_sec}, "
            f"last_seen_sec={self.last_seen_sec})"
        )

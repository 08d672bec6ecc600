"""
API 响应/请求模型
"""

from typing import Literal

from pydantic import BaseModel, Field


class EventAcceptedResponse(BaseModel):
    """事件接收响应"""
    accepted: bool = True
    kind: Literal["metric", "asset"]


class AssetStateResponse(BaseModel):
    """单个资产的存活状态"""
    name: str
    ttl_sec: int
    last_seen_sec: int
    expires_at: int
    port: str = ""
    parent_name: str = ""


class DefaultTTLBody(BaseModel):
    """默认 TTL（GET 响应 / PUT 请求）"""
    default_ttl: int = Field(..., ge=0, description="新资产的默认 TTL (秒)")

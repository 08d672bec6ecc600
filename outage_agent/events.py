"""
事件模型定义

入站事件有两种：
- MetricEvent: 设备周期上报的指标（只关心 TTL 和时间戳）
- AssetEvent: 资产生命周期变化（创建/更新/删除/退役）

通过 kind 字段区分，decode_event() 把总线/HTTP 上的字典解码成对应模型。
"""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class AssetOperation(str, Enum):
    """常见的资产操作类型"""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RETIRE = "retire"
    INVENTORY = "inventory"


class MetricEvent(BaseModel):
    """指标事件"""
    kind: Literal["metric"] = "metric"
    source_asset_name: str = Field(..., description="上报指标的资产名")
    ttl_seconds: int = Field(..., ge=0, description="指标上报周期 (秒)")
    timestamp_seconds: Optional[int] = Field(None, ge=0, description="指标时间戳，缺省为处理时间")
    quantity: str = Field(default="", description="指标类型，如 realpower.default（仅用于日志）")

    @model_validator(mode="before")
    @classmethod
    def _timestamp_from_aux(cls, data: Any) -> Any:
        # 总线消息把时间戳放在 aux["time"] 里
        if isinstance(data, dict) and data.get("timestamp_seconds") is None:
            aux = data.get("aux") or {}
            if isinstance(aux, dict) and aux.get("time") is not None:
                data = {**data, "timestamp_seconds": aux["time"]}
        return data


class AssetAux(BaseModel):
    """资产 aux 属性"""
    model_config = ConfigDict(extra="allow")

    type: str = ""
    subtype: str = ""
    status: str = ""
    parent_name: str = Field(
        default="",
        validation_alias=AliasChoices("parent_name", "parent_name.1"),
    )


class AssetEvent(BaseModel):
    """资产生命周期事件"""
    kind: Literal["asset"] = "asset"
    asset_name: str = Field(..., description="资产名")
    # 操作集合是开放的，未列出的操作按非删除处理
    operation: str = Field(..., description="操作类型，如 create / update / delete")
    aux: AssetAux = Field(default_factory=AssetAux)
    ext: Dict[str, Any] = Field(default_factory=dict, description="扩展属性，如 port")

    @property
    def port(self) -> str:
        port = self.ext.get("port")
        return "" if port is None else str(port)

    @property
    def parent_name(self) -> str:
        return self.aux.parent_name

    @property
    def is_removal(self) -> bool:
        """删除操作或状态为 retired 都视为移除"""
        return self.operation == AssetOperation.DELETE.value or self.aux.status == "retired"


Event = Annotated[Union[MetricEvent, AssetEvent], Field(discriminator="kind")]

_event_adapter = TypeAdapter(Event)


def decode_event(payload: Dict[str, Any]) -> Union[MetricEvent, AssetEvent]:
    """
    把字典解码成事件

    Raises:
        pydantic.ValidationError: 结构不合法（缺少 kind、字段类型错误等）
    """
    return _event_adapter.validate_python(payload)

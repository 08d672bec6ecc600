"""
事件 API

接收指标事件和资产事件，代替消息总线把事件送进存活缓存。
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from ...cache import LivenessCache
from ...events import decode_event
from ...models import EventAcceptedResponse
from ..dependencies import get_liveness_cache

router = APIRouter(prefix="/api/events", tags=["events"])


@router.post("", response_model=EventAcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def post_event(
    payload: Dict[str, Any] = Body(...),
    cache: LivenessCache = Depends(get_liveness_cache)
):
    """
    投递一个事件

    按 kind 解码为 metric 或 asset 事件，交给缓存处理。
    未知资产的指标、重复创建等情况同样返回 202。
    """
    try:
        event = decode_event(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e

    cache.ingest(event)
    return EventAcceptedResponse(kind=event.kind)

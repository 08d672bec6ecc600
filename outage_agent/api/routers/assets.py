"""
资产 API

提供存活状态查询、离线资产查询、传感器查询和手动移除。
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...cache import LivenessCache
from ...models import AssetStateResponse
from ..dependencies import get_liveness_cache, verify_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["assets"])


def to_state_response(name: str, entry) -> AssetStateResponse:
    return AssetStateResponse(name=name, **entry.to_dict())


@router.get("/assets", response_model=List[AssetStateResponse])
async def list_assets(cache: LivenessCache = Depends(get_liveness_cache)):
    """获取所有跟踪中的资产状态（按名称排序）"""
    return [to_state_response(name, cache.get(name)) for name in sorted(cache.names())]


@router.get("/assets/dead", response_model=List[str])
async def list_dead_assets(
    now: Optional[int] = Query(None, ge=0, description="检查时间 (UNIX 秒)，缺省为当前时间"),
    cache: LivenessCache = Depends(get_liveness_cache)
):
    """
    获取离线资产

    返回过期时间 <= now 的资产名，按名称排序。
    """
    return sorted(cache.dead_assets(now))


@router.get("/assets/{asset_name}", response_model=AssetStateResponse)
async def get_asset(asset_name: str, cache: LivenessCache = Depends(get_liveness_cache)):
    """获取单个资产状态"""
    entry = cache.get(asset_name)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Asset {asset_name} not tracked"
        )
    return to_state_response(asset_name, entry)


@router.delete(
    "/assets/{asset_name}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(verify_admin_token)]
)
async def delete_asset(asset_name: str, cache: LivenessCache = Depends(get_liveness_cache)):
    """移除资产（未跟踪的资产同样返回 204）"""
    cache.delete(asset_name)
    logger.info(f"Asset {asset_name} removed via API")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/sensors", response_model=List[str])
async def list_sensors(
    port: str = Query(..., description="端口名"),
    parent: str = Query(..., description="父设备名"),
    cache: LivenessCache = Depends(get_liveness_cache)
):
    """获取挂在 parent 设备 port 口上的传感器（按名称排序）"""
    return sorted(cache.sensors_on_port(port, parent))

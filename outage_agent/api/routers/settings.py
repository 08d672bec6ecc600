"""
运行时配置 API

查询和修改默认 TTL。
"""

import logging

from fastapi import APIRouter, Depends

from ...cache import LivenessCache
from ...models import DefaultTTLBody
from ..dependencies import get_liveness_cache, verify_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("/default-ttl", response_model=DefaultTTLBody)
async def get_default_ttl(cache: LivenessCache = Depends(get_liveness_cache)):
    """获取新资产的默认 TTL"""
    return DefaultTTLBody(default_ttl=cache.get_default_ttl())


@router.put("/default-ttl", response_model=DefaultTTLBody, dependencies=[Depends(verify_admin_token)])
async def put_default_ttl(body: DefaultTTLBody, cache: LivenessCache = Depends(get_liveness_cache)):
    """
    修改默认 TTL

    只影响之后新加入的资产，已跟踪的资产保持原 TTL。
    """
    cache.set_default_ttl(body.default_ttl)
    logger.info(f"Default TTL set to {body.default_ttl}s")
    return DefaultTTLBody(default_ttl=cache.get_default_ttl())

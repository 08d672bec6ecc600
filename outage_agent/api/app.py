"""
FastAPI 应用配置

注册事件、资产、配置路由。
"""

import logging

from fastapi import FastAPI

from .. import __version__
from .routers import assets, events, settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Outage Agent",
        description="设备离线检测：事件接收和存活状态查询",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )

    # 注册路由
    app.include_router(events.router)
    app.include_router(assets.router)
    app.include_router(settings.router)

    @app.get("/api/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app

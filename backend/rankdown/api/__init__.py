"""
API路由模块
"""

from fastapi import APIRouter
from .state_routes import router as state_router
from .round_routes import router as round_router
from .websocket_routes import router as ws_router

# 创建主路由器
api_router = APIRouter()

# 注册各个功能模块的路由
api_router.include_router(state_router, prefix="/state", tags=["看板状态"])
api_router.include_router(round_router, tags=["轮次判定"])
api_router.include_router(ws_router, prefix="/ws", tags=["WebSocket"])

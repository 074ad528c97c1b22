#!/usr/bin/env python3
"""
Rankdown 看板 - 后端主入口
"""

import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from rankdown.core.config import settings
from rankdown.api import api_router
from rankdown.api.dependencies import get_refresh_controller

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("rankdown")

app = FastAPI(
    title=settings.APP_NAME,
    description="Rankdown 淘汰投票游戏的只读看板API",
    version=settings.VERSION
)

# CORS设置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册API路由
app.include_router(api_router, prefix="/api")

@app.on_event("startup")
async def startup_event():
    """应用启动时开始定时拉取快照"""
    logger.info(f"🚀 启动 {settings.APP_NAME} 看板服务...")
    get_refresh_controller().start()

@app.on_event("shutdown")
async def shutdown_event():
    """应用关闭时停止定时拉取"""
    await get_refresh_controller().stop()

@app.get("/")
async def root():
    """根路径健康检查"""
    return {"message": f"{settings.APP_NAME} 看板运行中", "status": "healthy"}

@app.get("/health")
async def health_check():
    """健康检查端点"""
    controller = get_refresh_controller()
    return {
        "status": "healthy",
        "service": "rankdown-dashboard",
        "phase": controller.state.phase.value,
        "auto_refresh": controller.running,
        "pending_fetches": controller.pending_fetches
    }

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )

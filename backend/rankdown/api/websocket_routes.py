"""
WebSocket API路由
"""

import json
import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from rankdown.api.dependencies import (
    get_websocket_manager, get_dashboard_service, get_refresh_controller
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.websocket("/state")
async def websocket_state_endpoint(websocket: WebSocket):
    """看板WebSocket连接端点：连接时推送当前状态，之后每次更新都会广播"""
    manager = get_websocket_manager()
    dashboard = get_dashboard_service()
    controller = get_refresh_controller()

    await manager.connect(websocket)

    try:
        await manager.send_personal_message({
            "type": "connected",
            "state": dashboard.build(controller.state).model_dump(mode="json"),
        }, websocket)

        # 监听消息
        while True:
            data = await websocket.receive_text()
            try:
                message_data = json.loads(data)
            except json.JSONDecodeError:
                await manager.send_personal_message({
                    "type": "error",
                    "message": "Invalid JSON message",
                }, websocket)
                continue

            message_type = message_data.get("type") if isinstance(message_data, dict) else None
            if message_type == "ping":
                await manager.send_personal_message({"type": "pong"}, websocket)
            elif message_type == "refresh":
                # 刷新结果通过广播送达
                await controller.refresh()
            else:
                await manager.send_personal_message({
                    "type": "error",
                    "message": f"Unknown message type: {message_type}",
                }, websocket)

    except WebSocketDisconnect:
        logger.info("观察者主动断开连接")
    finally:
        manager.disconnect(websocket)

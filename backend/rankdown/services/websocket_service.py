"""
WebSocket连接管理服务
"""

import json
import logging
from fastapi import WebSocket
from typing import List

logger = logging.getLogger(__name__)


class WebSocketManager:
    """看板观察者连接管理器"""

    def __init__(self):
        self.connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        """接受观察者连接"""
        await websocket.accept()
        # 检查是否已存在，避免重复连接
        if websocket not in self.connections:
            self.connections.append(websocket)
            logger.info(f"新观察者连接，当前连接数: {len(self.connections)}")

    def disconnect(self, websocket: WebSocket):
        """断开观察者连接"""
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info(f"观察者断开，当前连接数: {len(self.connections)}")

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """发送个人消息"""
        try:
            await websocket.send_text(json.dumps(message, ensure_ascii=False))
        except Exception as e:
            logger.warning(f"发送个人消息失败: {e}")

    async def broadcast(self, message: dict) -> int:
        """向所有观察者广播消息，返回成功数"""
        connections = self.connections.copy()  # 创建副本进行迭代
        if not connections:
            return 0

        message_text = json.dumps(message, ensure_ascii=False)
        failed_connections = []
        success_count = 0

        for connection in connections:
            try:
                await connection.send_text(message_text)
                success_count += 1
            except Exception as e:
                logger.warning(f"广播消息失败: {e}")
                failed_connections.append(connection)

        # 移除失败的连接
        for failed_connection in failed_connections:
            self.disconnect(failed_connection)

        logger.debug(
            f"📡 广播 {message.get('type', 'unknown')}: {success_count} 成功, {len(failed_connections)} 失败"
        )
        return success_count

"""
全局服务实例
"""

from typing import Optional
from rankdown.schemas.dashboard_schemas import DisplayState
from rankdown.services.dashboard_service import DashboardService
from rankdown.services.snapshot_service import SnapshotFetcher, SnapshotRefreshController
from rankdown.services.websocket_service import WebSocketManager

_controller: Optional[SnapshotRefreshController] = None
_dashboard: Optional[DashboardService] = None
_manager: Optional[WebSocketManager] = None


def get_websocket_manager() -> WebSocketManager:
    """获取全局WebSocket管理器实例"""
    global _manager
    if _manager is None:
        _manager = WebSocketManager()
    return _manager


def get_dashboard_service() -> DashboardService:
    """获取全局看板服务实例"""
    global _dashboard
    if _dashboard is None:
        _dashboard = DashboardService()
    return _dashboard


async def _broadcast_state(state: DisplayState) -> None:
    view = get_dashboard_service().build(state)
    await get_websocket_manager().broadcast({
        "type": "state_updated",
        "state": view.model_dump(mode="json"),
    })


def get_refresh_controller() -> SnapshotRefreshController:
    """获取全局快照刷新控制器，每次应用新状态后推送给观察者"""
    global _controller
    if _controller is None:
        _controller = SnapshotRefreshController(SnapshotFetcher())
        _controller.add_listener(_broadcast_state)
    return _controller


def reset_services() -> None:
    """丢弃所有全局实例（配置变更后重新创建）"""
    global _controller, _dashboard, _manager
    _controller = None
    _dashboard = None
    _manager = None

# 业务逻辑服务包
from .resolver import resolve_round
from .history import aggregate_eliminations
from .validator import validate_snapshot, validate_round
from .dashboard_service import DashboardService
from .snapshot_service import SnapshotFetcher, SnapshotRefreshController, DisplayStateHolder
from .websocket_service import WebSocketManager

__all__ = [
    "resolve_round",
    "aggregate_eliminations",
    "validate_snapshot",
    "validate_round",
    "DashboardService",
    "SnapshotFetcher",
    "SnapshotRefreshController",
    "DisplayStateHolder",
    "WebSocketManager",
]

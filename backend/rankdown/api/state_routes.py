"""
看板状态API路由
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import List
from rankdown.api.dependencies import get_refresh_controller, get_dashboard_service
from rankdown.schemas.dashboard_schemas import DashboardView
from rankdown.schemas.snapshot_schemas import Issue
from rankdown.services.dashboard_service import DashboardService
from rankdown.services.snapshot_service import SnapshotRefreshController

router = APIRouter()

@router.get("", response_model=DashboardView)
async def get_state(
    controller: SnapshotRefreshController = Depends(get_refresh_controller),
    dashboard: DashboardService = Depends(get_dashboard_service)
):
    """获取当前看板状态"""
    return dashboard.build(controller.state)

@router.post("/refresh", response_model=DashboardView)
async def refresh_state(
    controller: SnapshotRefreshController = Depends(get_refresh_controller),
    dashboard: DashboardService = Depends(get_dashboard_service)
):
    """立即刷新（手动重试）"""
    await controller.refresh()
    return dashboard.build(controller.state)

@router.get("/issues", response_model=List[Issue])
async def get_state_issues(
    controller: SnapshotRefreshController = Depends(get_refresh_controller),
    dashboard: DashboardService = Depends(get_dashboard_service)
):
    """获取当前快照的数据问题"""
    state = controller.state
    if state.snapshot is None:
        raise HTTPException(status_code=404, detail=state.error or "No snapshot loaded yet")
    return dashboard.summary_for(state.snapshot).issues

"""
看板展示相关的数据模式
"""

import enum
from pydantic import BaseModel, Field, field_serializer
from typing import Optional, List
from datetime import datetime
from rankdown.schemas.snapshot_schemas import (
    Snapshot, EliminationRecord, ResolvedNominee, Issue
)


class DisplayPhase(str, enum.Enum):
    """展示状态阶段"""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DisplayState(BaseModel):
    """当前展示状态，每次成功或失败的拉取都整体替换，不做局部修改"""
    phase: DisplayPhase = DisplayPhase.LOADING
    snapshot: Optional[Snapshot] = None
    error: Optional[str] = None
    sequence: int = 0
    loaded_at: Optional[datetime] = None

    class Config:
        frozen = True


class VoteEntry(BaseModel):
    """一条投票：投票者 -> 目标"""
    voter: str
    target: Optional[str] = None


class RoundView(BaseModel):
    """当前轮次的展示信息"""
    round_number: Optional[int] = None
    nominator: Optional[str] = None
    nominee_count: int
    save_count: int
    elim_count: int
    leftover_count: int
    board: List[ResolvedNominee]
    saves: List[VoteEntry]
    elims: List[VoteEntry]


class SnapshotSummary(BaseModel):
    """一个快照的全部展示数据（按快照缓存）"""
    title: str
    updated_at: str
    players: List[str]
    player_count: int
    round: Optional[RoundView] = None
    eliminated: List[EliminationRecord]
    eliminated_count: int
    issues: List[Issue] = Field(default_factory=list)


class DashboardView(BaseModel):
    """看板响应模式"""
    phase: DisplayPhase
    title: str
    error: Optional[str] = None
    sequence: int
    refresh_interval_sec: int
    loaded_at: Optional[datetime] = None
    data: Optional[SnapshotSummary] = None

    @field_serializer('loaded_at')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        if dt is None:
            return None
        return dt.isoformat()

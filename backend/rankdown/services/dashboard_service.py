"""
看板视图构建服务
"""

from typing import Dict, List, Optional
from rankdown.core.config import settings
from rankdown.core.utils import format_updated_at
from rankdown.schemas.snapshot_schemas import Snapshot, Round
from rankdown.schemas.dashboard_schemas import (
    DisplayState, DisplayPhase, DashboardView, SnapshotSummary, RoundView, VoteEntry
)
from rankdown.services.resolver import resolve_round
from rankdown.services.history import aggregate_eliminations
from rankdown.services.validator import validate_snapshot


def _vote_entries(votes: Dict[str, Optional[str]]) -> List[VoteEntry]:
    # 映射的迭代顺序不可靠，按投票者姓名排序
    return [VoteEntry(voter=voter, target=votes[voter]) for voter in sorted(votes)]


def build_round_view(round_obj: Round) -> RoundView:
    """构建当前轮次视图"""
    return RoundView(
        round_number=round_obj.round_number,
        nominator=round_obj.nominator,
        nominee_count=len(round_obj.nominees),
        save_count=len(round_obj.saves),
        elim_count=len(round_obj.elims),
        leftover_count=len(round_obj.leftovers_eliminated),
        board=resolve_round(round_obj),
        saves=_vote_entries(round_obj.saves),
        elims=_vote_entries(round_obj.elims),
    )


def summarize_snapshot(snapshot: Snapshot, default_title: str = "Rankdown") -> SnapshotSummary:
    """一次性计算快照的全部展示数据"""
    current = snapshot.current_round
    eliminated = aggregate_eliminations(snapshot.eliminated)
    return SnapshotSummary(
        title=snapshot.game_title or default_title,
        updated_at=format_updated_at(snapshot.updated_at),
        players=list(snapshot.players),
        player_count=len(snapshot.players),
        round=build_round_view(current) if current is not None else None,
        eliminated=eliminated,
        eliminated_count=len(eliminated),
        issues=validate_snapshot(snapshot),
    )


class DashboardService:
    """看板服务

    汇总结果按快照对象身份缓存：同一个快照重复渲染时直接复用，
    新快照到来时重新计算。缓存只保留最近一个快照。
    """

    def __init__(self, refresh_interval_sec: Optional[int] = None, default_title: Optional[str] = None):
        self.refresh_interval_sec = (
            refresh_interval_sec if refresh_interval_sec is not None else settings.REFRESH_INTERVAL_SEC
        )
        self.default_title = default_title or settings.APP_NAME
        self._cached_snapshot: Optional[Snapshot] = None
        self._cached_summary: Optional[SnapshotSummary] = None

    def summary_for(self, snapshot: Snapshot) -> SnapshotSummary:
        """获取快照汇总（按对象身份缓存）"""
        if self._cached_snapshot is snapshot and self._cached_summary is not None:
            return self._cached_summary
        summary = summarize_snapshot(snapshot, self.default_title)
        self._cached_snapshot = snapshot
        self._cached_summary = summary
        return summary

    def build(self, state: DisplayState) -> DashboardView:
        """根据展示状态构建看板视图"""
        summary = None
        if state.snapshot is not None and state.phase != DisplayPhase.LOADING:
            summary = self.summary_for(state.snapshot)

        return DashboardView(
            phase=state.phase,
            title=summary.title if summary else self.default_title,
            error=state.error,
            sequence=state.sequence,
            refresh_interval_sec=self.refresh_interval_sec,
            loaded_at=state.loaded_at,
            data=summary,
        )

"""
轮次判定API路由（对任意提交的数据计算，不影响当前看板）
"""

from fastapi import APIRouter
from typing import List
from rankdown.schemas.snapshot_schemas import (
    Round, Snapshot, EliminationRecord, ResolvedNominee, Issue
)
from rankdown.services.resolver import resolve_round
from rankdown.services.history import aggregate_eliminations
from rankdown.services.validator import validate_snapshot

router = APIRouter()

@router.post("/resolve", response_model=List[ResolvedNominee])
async def resolve(round_data: Round):
    """计算一个轮次中每个被提名者的状态"""
    return resolve_round(round_data)

@router.post("/history", response_model=List[EliminationRecord])
async def history(records: List[EliminationRecord]):
    """按轮次倒序排列淘汰记录"""
    return aggregate_eliminations(records)

@router.post("/validate", response_model=List[Issue])
async def validate(snapshot: Snapshot):
    """校验一个快照"""
    return validate_snapshot(snapshot)

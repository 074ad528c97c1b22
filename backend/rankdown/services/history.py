"""
淘汰历史排序
"""

from typing import List, Sequence
from rankdown.schemas.snapshot_schemas import EliminationRecord


def _round_key(record: EliminationRecord) -> int:
    # 缺失轮次只在比较时按 0 处理
    return record.round if record.round is not None else 0


def aggregate_eliminations(records: Sequence[EliminationRecord]) -> List[EliminationRecord]:
    """按轮次倒序排列淘汰记录，同轮次保持输入顺序（稳定排序），不去重"""
    return sorted(records, key=_round_key, reverse=True)

"""
轮次状态判定
"""

from typing import List
from rankdown.schemas.snapshot_schemas import Round, NomineeStatus, ResolvedNominee


def resolve_round(round_obj: Round) -> List[ResolvedNominee]:
    """把本轮的原始投票记录转换成每个被提名者的状态

    优先级固定：Leftover > Eliminated > Saved > Pending。
    输出顺序和重复项与 nominees 完全一致，不去重（重复由校验器报告）。
    同时被救和被淘汰的名字按优先级判为 Eliminated。
    """
    saved = {target for target in round_obj.saves.values() if target is not None}
    eliminated = {target for target in round_obj.elims.values() if target is not None}
    leftover = round_obj.leftovers_eliminated

    results = []
    for name in round_obj.nominees:
        if name in leftover:
            status = NomineeStatus.LEFTOVER
        elif name in eliminated:
            status = NomineeStatus.ELIMINATED
        elif name in saved:
            status = NomineeStatus.SAVED
        else:
            status = NomineeStatus.PENDING
        results.append(ResolvedNominee(name=name, status=status))
    return results

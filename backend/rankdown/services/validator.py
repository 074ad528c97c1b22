"""
快照一致性校验

只报告问题，不修正数据，也不抛异常。结果用于诊断和测试，不影响判定和展示。
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional
from rankdown.schemas.snapshot_schemas import (
    Snapshot, Round, Issue, IssueSeverity
)


def _duplicates(names: Iterable[str]) -> List[str]:
    return [name for name, count in Counter(names).items() if count > 1]


def _error(code: str, message: str) -> Issue:
    return Issue(severity=IssueSeverity.ERROR, code=code, message=message)


def _warning(code: str, message: str) -> Issue:
    return Issue(severity=IssueSeverity.WARNING, code=code, message=message)


def _check_votes(kind: str, votes: Dict[str, Optional[str]], nominees: set) -> List[Issue]:
    issues = []
    for voter in sorted(votes):
        target = votes[voter]
        if target is None:
            issues.append(_warning(f"empty_{kind}_vote", f"{voter} has no {kind} target yet"))
        elif target not in nominees:
            issues.append(_warning(
                f"{kind}_target_not_nominated",
                f"{voter} voted to {kind} {target!r}, who is not a nominee this round",
            ))
    return issues


def validate_round(round_obj: Round, players: Iterable[str] = ()) -> List[Issue]:
    """校验单个轮次"""
    issues = []
    nominees = set(round_obj.nominees)
    player_set = set(players)

    if round_obj.round_number is not None and round_obj.round_number < 1:
        issues.append(_warning(
            "invalid_round_number",
            f"Round number {round_obj.round_number} is not a positive integer",
        ))

    for name in _duplicates(round_obj.nominees):
        issues.append(_error("duplicate_nominee", f"Nominee {name!r} is listed more than once"))

    if player_set:
        if round_obj.nominator and round_obj.nominator not in player_set:
            issues.append(_warning(
                "unknown_nominator",
                f"Nominator {round_obj.nominator!r} is not a player",
            ))
        for name in dict.fromkeys(round_obj.nominees):
            if name not in player_set:
                issues.append(_warning("unknown_nominee", f"Nominee {name!r} is not a player"))

    issues.extend(_check_votes("save", round_obj.saves, nominees))
    issues.extend(_check_votes("eliminate", round_obj.elims, nominees))

    for name in sorted(round_obj.leftovers_eliminated):
        if name not in nominees:
            issues.append(_warning(
                "leftover_not_nominated",
                f"Leftover elimination {name!r} is not a nominee this round",
            ))

    # 同一投票者既救人又淘汰人：判定时按优先级处理，这里只提示
    for voter in sorted(set(round_obj.saves) & set(round_obj.elims)):
        if round_obj.saves[voter] is None or round_obj.elims[voter] is None:
            continue
        issues.append(_warning(
            "conflicting_vote",
            f"{voter} has both a save ({round_obj.saves[voter]!r}) "
            f"and an elimination ({round_obj.elims[voter]!r}) this round",
        ))

    return issues


def validate_snapshot(snapshot: Snapshot) -> List[Issue]:
    """校验整个快照，返回发现的所有问题"""
    issues = []

    for name in _duplicates(snapshot.players):
        issues.append(_error("duplicate_player", f"Player {name!r} is listed more than once"))

    current = snapshot.current_round
    if current is not None:
        issues.extend(validate_round(current, snapshot.players))

    current_number = current.round_number if current is not None else None
    for index, record in enumerate(snapshot.eliminated):
        label = record.name if record.name else f"#{index + 1}"
        if not record.name:
            issues.append(_warning("unnamed_elimination", f"Elimination record {label} has no name"))
        if record.round is None:
            continue
        if record.round < 1:
            issues.append(_warning(
                "invalid_elimination_round",
                f"Elimination of {label} has non-positive round {record.round}",
            ))
        elif current_number is not None and record.round > current_number:
            issues.append(_error(
                "future_elimination",
                f"Elimination of {label} in round {record.round} is after the current round {current_number}",
            ))

    named = [record.name for record in snapshot.eliminated if record.name]
    for name in _duplicates(named):
        issues.append(_warning("repeat_elimination", f"{name!r} appears more than once in the eliminated list"))

    return issues

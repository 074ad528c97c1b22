"""
游戏状态快照的数据模式

快照由运营者在外部发布，这里只读取。所有字段都是可选的，
缺失或为 null 的集合字段一律按空处理，不会导致解析失败。
"""

import enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, FrozenSet, Union


class EliminationMethod(str, enum.Enum):
    """淘汰方式"""
    VOTED = "voted"         # 直接投票淘汰
    LEFTOVER = "leftover"   # 剩余规则淘汰


class NomineeStatus(str, enum.Enum):
    """被提名者在本轮的状态（派生值，不持久化）"""
    SAVED = "saved"
    ELIMINATED = "eliminated"
    LEFTOVER = "leftover"
    PENDING = "pending"


class IssueSeverity(str, enum.Enum):
    """数据问题级别"""
    WARNING = "warning"
    ERROR = "error"


def _empty_if_none(value, empty):
    return empty if value is None else value


def _without_none(value):
    """集合字段：整体为 null 按空处理，其中的 null 元素直接丢弃"""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return [item for item in value if item is not None]
    return value


class Round(BaseModel):
    """当前投票轮次"""
    round_number: Optional[int] = Field(default=None, alias="roundNumber", description="轮次编号")
    nominator: Optional[str] = Field(default=None, description="提名者")
    nominees: List[str] = Field(default_factory=list, description="被提名者，保持原始顺序")
    # 目标为 None 表示投票者还没选（保留下来交给校验器提示）
    saves: Dict[str, Optional[str]] = Field(default_factory=dict, description="投票者 -> 救下的被提名者")
    elims: Dict[str, Optional[str]] = Field(default_factory=dict, description="投票者 -> 淘汰的被提名者")
    leftovers_eliminated: FrozenSet[str] = Field(
        default_factory=frozenset,
        alias="leftoversEliminated",
        description="因剩余规则被淘汰的被提名者",
    )

    @field_validator("nominees", "leftovers_eliminated", mode="before")
    @classmethod
    def _names_default(cls, value):
        return _without_none(value)

    @field_validator("saves", "elims", mode="before")
    @classmethod
    def _votes_default(cls, value):
        return _empty_if_none(value, {})

    class Config:
        frozen = True
        populate_by_name = True


class EliminationRecord(BaseModel):
    """一条永久淘汰记录"""
    name: Optional[str] = None
    round: Optional[int] = Field(default=None, description="淘汰发生的轮次，缺失表示未知")
    method: EliminationMethod = EliminationMethod.VOTED

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, value):
        # 只有 leftover 是特殊的，其余一律视为投票淘汰
        if isinstance(value, str) and value.strip().lower() == EliminationMethod.LEFTOVER.value:
            return EliminationMethod.LEFTOVER
        return EliminationMethod.VOTED

    class Config:
        frozen = True


class Snapshot(BaseModel):
    """完整的游戏状态快照"""
    game_title: Optional[str] = Field(default=None, alias="gameTitle")
    updated_at: Optional[Union[str, int, float]] = Field(default=None, alias="updatedAt")
    players: List[str] = Field(default_factory=list)
    current_round: Optional[Round] = Field(default=None, alias="currentRound")
    eliminated: List[EliminationRecord] = Field(default_factory=list)

    @field_validator("players", "eliminated", mode="before")
    @classmethod
    def _list_default(cls, value):
        return _without_none(value)

    class Config:
        frozen = True
        populate_by_name = True


class ResolvedNominee(BaseModel):
    """单个被提名者的判定结果"""
    name: str
    status: NomineeStatus

    class Config:
        frozen = True


class Issue(BaseModel):
    """校验发现的数据问题（仅供诊断，不阻塞展示）"""
    severity: IssueSeverity
    code: str
    message: str

    class Config:
        frozen = True

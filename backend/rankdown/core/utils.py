"""
工具函数模块
"""

from typing import Optional, Union
from datetime import datetime, timezone

PLACEHOLDER = "—"

# 大于此值的数字时间戳按毫秒处理
_EPOCH_MS_THRESHOLD = 10_000_000_000


def format_updated_at(value: Optional[Union[str, int, float]]) -> str:
    """格式化快照的 updatedAt，用于展示

    支持 ISO 字符串与 epoch（秒或毫秒）；缺失时返回占位符，无法解析时原样返回。
    """
    if value is None or value == "":
        return PLACEHOLDER

    try:
        if isinstance(value, bool):
            raise ValueError(value)
        if isinstance(value, (int, float)):
            seconds = value / 1000 if abs(value) >= _EPOCH_MS_THRESHOLD else value
            dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
        else:
            text = value.strip()
            # Python 3.11 之前的 fromisoformat 不认识 'Z' 后缀
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            dt = datetime.fromisoformat(text)
    except (ValueError, OverflowError, OSError):
        return str(value)

    if dt.tzinfo is None:
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    # 统一转成UTC并带上'Z'后缀
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S") + "Z"

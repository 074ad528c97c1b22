"""
快照拉取相关异常
"""


class SnapshotError(Exception):
    """快照不可用（拉取或解析失败）"""


class SnapshotFetchError(SnapshotError):
    """网络失败、非成功状态码或文件不可读"""


class SnapshotParseError(SnapshotError):
    """内容不是合法 JSON，或不像一个快照文档"""

"""
快照拉取与定时刷新服务
"""

import asyncio
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Set, Union
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from rankdown.core.config import settings
from rankdown.core.exceptions import SnapshotError, SnapshotFetchError, SnapshotParseError
from rankdown.schemas.snapshot_schemas import Snapshot
from rankdown.schemas.dashboard_schemas import DisplayState, DisplayPhase

logger = logging.getLogger(__name__)

# 每次都要拿到最新发布的内容，不接受缓存
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
}

StateListener = Callable[[DisplayState], Awaitable[None]]


def parse_snapshot(raw: Union[str, bytes], label: str = "state.json") -> Snapshot:
    """把原始内容解析成快照，失败时抛出 SnapshotParseError"""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise SnapshotParseError(f"{label} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotParseError(f"{label} must contain a JSON object, got {type(data).__name__}")

    try:
        return Snapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotParseError(
            f"{label} is not a valid game state ({e.error_count()} invalid field(s))"
        ) from e


class SnapshotFetcher:
    """从 URL 或本地文件读取快照"""

    def __init__(
        self,
        source: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.source = source or settings.SNAPSHOT_SOURCE
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SEC
        self.transport = transport

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    @property
    def label(self) -> str:
        """错误信息里使用的文件名"""
        path = urlparse(self.source).path if self.is_remote else self.source
        return Path(path).name or "snapshot"

    async def fetch(self) -> Snapshot:
        """拉取并解析一次快照"""
        if self.is_remote:
            raw = await self._fetch_remote()
        else:
            raw = await self._read_local()
        return parse_snapshot(raw, self.label)

    async def _fetch_remote(self) -> bytes:
        # ts 参数用于绕过中间缓存
        params = {"ts": int(time.time() * 1000)}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.source, params=params, headers=NO_CACHE_HEADERS)
        except httpx.HTTPError as e:
            raise SnapshotFetchError(f"Failed to load {self.label}: {e}") from e

        if not response.is_success:
            raise SnapshotFetchError(f"Failed to load {self.label} ({response.status_code})")
        return response.content

    async def _read_local(self) -> bytes:
        path = Path(self.source)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise SnapshotFetchError(f"Failed to load {self.label}: {e.strerror or e}") from e


class DisplayStateHolder:
    """当前展示状态的持有者：启动时为 loading，之后只做整体替换"""

    def __init__(self):
        self._state = DisplayState()

    @property
    def current(self) -> DisplayState:
        return self._state

    def replace(self, state: DisplayState) -> None:
        self._state = state


class SnapshotRefreshController:
    """定时拉取快照并更新展示状态

    每次拉取在发起时领取一个递增序号；完成时只有序号仍是最新发起的那一次，
    且控制器未停止，结果才会被应用。晚到的旧结果一律丢弃。
    """

    def __init__(
        self,
        fetcher: SnapshotFetcher,
        holder: Optional[DisplayStateHolder] = None,
        interval_sec: Optional[float] = None,
        keep_last_good_on_error: Optional[bool] = None,
    ):
        self.fetcher = fetcher
        self.holder = holder or DisplayStateHolder()
        self.interval_sec = interval_sec if interval_sec is not None else settings.REFRESH_INTERVAL_SEC
        self.keep_last_good_on_error = (
            keep_last_good_on_error if keep_last_good_on_error is not None
            else settings.KEEP_LAST_GOOD_ON_ERROR
        )
        self._listeners: List[StateListener] = []
        self._issued_sequence = 0
        self._stopped = False
        self._loop_task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def state(self) -> DisplayState:
        return self.holder.current

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def pending_fetches(self) -> int:
        """定时器发起、尚未完成的拉取数"""
        return len(self._inflight)

    def add_listener(self, listener: StateListener) -> None:
        """注册状态更新回调，每次应用新状态后调用"""
        self._listeners.append(listener)

    def _next_sequence(self) -> int:
        self._issued_sequence += 1
        return self._issued_sequence

    def _is_latest(self, sequence: int) -> bool:
        return not self._stopped and sequence == self._issued_sequence

    def _error_state(self, sequence: int, message: str) -> DisplayState:
        previous = self.holder.current
        if self.keep_last_good_on_error and previous.snapshot is not None:
            return DisplayState(
                phase=DisplayPhase.ERROR,
                snapshot=previous.snapshot,
                error=message,
                sequence=sequence,
                loaded_at=previous.loaded_at,
            )
        return DisplayState(phase=DisplayPhase.ERROR, error=message, sequence=sequence)

    async def refresh(self) -> DisplayState:
        """立即拉取一次（手动刷新 / 重试），返回拉取后的当前状态"""
        sequence = self._next_sequence()
        try:
            snapshot = await self.fetcher.fetch()
        except SnapshotError as e:
            logger.warning(f"⚠️ 快照拉取失败 #{sequence}: {e}")
            new_state = self._error_state(sequence, str(e))
        else:
            new_state = DisplayState(
                phase=DisplayPhase.READY,
                snapshot=snapshot,
                sequence=sequence,
                loaded_at=datetime.now(timezone.utc),
            )

        if not self._is_latest(sequence):
            logger.info(f"⏭️ 丢弃过期的拉取结果 #{sequence}（最新 #{self._issued_sequence}）")
            return self.holder.current

        self.holder.replace(new_state)
        if new_state.phase == DisplayPhase.READY:
            logger.info(f"✅ 已应用快照 #{sequence}")
        await self._notify(new_state)
        return new_state

    async def _notify(self, state: DisplayState) -> None:
        for listener in list(self._listeners):
            try:
                await listener(state)
            except Exception as e:
                logger.error(f"❌ 状态更新回调失败: {e}")

    def _spawn_refresh(self) -> None:
        task = asyncio.create_task(self.refresh())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run(self) -> None:
        # 不等待上一次拉取完成，新旧结果由序号裁决
        while not self._stopped:
            self._spawn_refresh()
            await asyncio.sleep(self.interval_sec)

    def start(self) -> None:
        """启动定时刷新（立即拉取一次，之后每个间隔拉取一次）"""
        if self.running:
            return
        self._stopped = False
        self._loop_task = asyncio.create_task(self._run())
        logger.info(f"🚀 快照定时刷新已启动: {self.fetcher.source}，间隔 {self.interval_sec}s")

    async def stop(self) -> None:
        """停止定时刷新；进行中的拉取不会被中断，但结果会被忽略"""
        self._stopped = True
        # 让所有已发起的拉取都不再是最新
        self._issued_sequence += 1
        task, self._loop_task = self._loop_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        # 等已发起的拉取自然结束，结果按序号丢弃
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)
        logger.info("🛑 快照定时刷新已停止")

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
批量读取与进度回调

供 VpkArchive.read_batch / extract_all 使用的错误策略、进度信息和结果统计。
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple


class ErrorPolicy(Enum):
    """错误处理策略"""
    RAISE = "raise"   # 立即抛出异常
    SKIP = "skip"     # 记录失败条目，继续处理
    ABORT = "abort"   # 记录失败条目并停止，保留已完成部分

    @classmethod
    def coerce(cls, value) -> 'ErrorPolicy':
        """接受 ErrorPolicy 或其字符串值"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"未知的错误策略 {value!r}, 可选: {[p.value for p in cls]}"
            ) from None


@dataclass
class ProgressInfo:
    """传递给进度回调的数据"""
    current: int              # 已处理条目数
    total: int                # 条目总数
    current_file: str         # 当前条目的逻辑路径
    bytes_processed: int      # 已处理字节数
    bytes_total: int          # 字节总数
    elapsed_time: float       # 已耗时 (秒)

    @property
    def progress(self) -> float:
        """进度 (0.0 - 1.0)"""
        if self.total == 0:
            return 0.0
        return self.current / self.total


@dataclass
class BatchResult:
    """批量操作结果"""
    success_count: int = 0
    failed_count: int = 0
    total_bytes: int = 0
    elapsed_time: float = 0.0
    failed_files: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return self.success_count + self.failed_count


ProgressCallback = Callable[[ProgressInfo], None]


class ProgressTracker:
    """
    进度跟踪器

    每处理一个条目调用一次 update()，按最小间隔触发回调。
    """

    def __init__(
        self,
        total_files: int,
        total_bytes: int = 0,
        callback: Optional[ProgressCallback] = None,
        callback_interval: float = 0.0
    ):
        self._total_files = total_files
        self._total_bytes = total_bytes
        self._callback = callback
        self._callback_interval = callback_interval

        self._current_file = 0
        self._processed_bytes = 0
        self._start_time = time.monotonic()
        self._last_callback_time: Optional[float] = None

    def update(self, file_path: str, bytes_processed: int = 0) -> None:
        self._current_file += 1
        self._processed_bytes += bytes_processed

        if not self._callback:
            return
        now = time.monotonic()
        last = self._last_callback_time
        # 最后一个条目总是回调
        if (last is None or now - last >= self._callback_interval
                or self._current_file == self._total_files):
            self._callback(ProgressInfo(
                current=self._current_file,
                total=self._total_files,
                current_file=file_path,
                bytes_processed=self._processed_bytes,
                bytes_total=self._total_bytes,
                elapsed_time=now - self._start_time
            ))
            self._last_callback_time = now

    def finish(self) -> float:
        """返回总耗时"""
        return time.monotonic() - self._start_time

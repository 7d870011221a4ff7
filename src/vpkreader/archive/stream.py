#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
限长流

包装分片文件句柄，读取不会越过条目的数据长度。
"""

import io
from typing import BinaryIO


class BoundedStream(io.RawIOBase):
    """
    只读限长流

    从底层流的当前位置起最多读取 length 字节，之后返回 EOF。
    关闭时同时关闭底层流。
    """

    def __init__(self, raw: BinaryIO, length: int):
        """
        Args:
            raw: 已定位到数据起点的底层流
            length: 允许读取的最大字节数
        """
        super().__init__()
        self._raw = raw
        self._remaining = length

    @property
    def remaining(self) -> int:
        """剩余可读字节数"""
        return self._remaining

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        size = min(len(buffer), self._remaining)
        if size <= 0:
            return 0
        data = self._raw.read(size)
        count = len(data)
        buffer[:count] = data
        self._remaining -= count
        return count

    def close(self) -> None:
        if not self.closed:
            self._raw.close()
        super().close()

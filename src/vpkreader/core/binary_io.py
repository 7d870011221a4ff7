#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
二进制 I/O 封装

提供 BinaryReader 类，封装目录文件的底层读取操作，
使解析模块不需要直接操作文件指针。
"""

import struct
from typing import BinaryIO, Tuple, Any

from ..exceptions import NameDecodeError, TruncatedDataError


class BinaryReader:
    """
    二进制读取器

    在只进的字节游标上提供类型化的 Little-Endian 读取方法。
    数据不足时抛出 TruncatedDataError。
    """

    def __init__(self, file: BinaryIO):
        """
        初始化读取器

        Args:
            file: 以 'rb' 模式打开、位于偏移 0 的文件对象 (或 BytesIO)
        """
        self._file = file
        self._position = 0

    @property
    def position(self) -> int:
        """当前读取位置 (相对于构造时的起点)"""
        return self._position

    # ==================== 原始读取 ====================

    def read_bytes(self, size: int) -> bytes:
        """
        读取指定字节数

        Args:
            size: 要读取的字节数

        Returns:
            读取的字节

        Raises:
            TruncatedDataError: 数据不足请求的字节数
        """
        data = self._file.read(size)
        if len(data) < size:
            raise TruncatedDataError(size, len(data))
        self._position += size
        return data

    def read_struct(self, fmt: str) -> Tuple[Any, ...]:
        """
        按 struct 格式读取

        Args:
            fmt: struct 格式字符串

        Returns:
            解包后的值元组
        """
        size = struct.calcsize(fmt)
        data = self.read_bytes(size)
        return struct.unpack(fmt, data)

    # ==================== 类型化读取 ====================

    def read_u32(self) -> int:
        """读取无符号 32 位整数 (Little-Endian)"""
        return self.read_struct('<I')[0]

    # ==================== 字符串读取 ====================

    def read_cstring(self, encoding: str = 'latin-1') -> str:
        """
        读取以 NUL 结尾的字符串

        逐字节读取直到遇到 0x00，结尾的 NUL 会被消耗但不包含在结果中。
        即使是空字符串也会消耗 1 个字节。

        Args:
            encoding: 单字节编码

        Returns:
            解码后的字符串 (可能为空)

        Raises:
            TruncatedDataError: 遇到 NUL 之前数据结束
            NameDecodeError: 名称字节不符合指定编码
        """
        buffer = bytearray()
        while True:
            byte = self.read_bytes(1)
            if byte == b'\x00':
                break
            buffer += byte
        try:
            return buffer.decode(encoding)
        except UnicodeDecodeError as e:
            raise NameDecodeError(bytes(buffer), encoding) from e

    # ==================== 位置控制 ====================

    def skip(self, size: int):
        """
        跳过指定字节

        按读取方式跳过，因此同样适用于不可 seek 的流。

        Args:
            size: 要跳过的字节数
        """
        self.read_bytes(size)

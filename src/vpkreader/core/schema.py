#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
vpkreader 数据结构定义

定义 VpkHeader、EntryRecord 等定长二进制结构及格式常量。
"""

import struct
from dataclasses import dataclass
from typing import ClassVar, Tuple


# ==================== 常量定义 ====================

# 目录文件签名
VPK_SIGNATURE = 0x55AA1234

# 支持的格式版本
SUPPORTED_VERSIONS: Tuple[int, ...] = (1, 2)

# 文件记录终止符
ENTRY_TERMINATOR = 0xFFFF

# 版本 2 头部在 tree_length 之后保留的字节数 (4 个 u32)
V2_EXTENSION_SIZE = 16

# 名称解码方式 (格式不携带编码信息，使用固定的单字节编码)
DEFAULT_ENCODING = 'latin-1'

# 目录文件名中的标记，分片文件名由它替换而来
DIR_MARKER = '_dir'


# ==================== 文件头 ====================

@dataclass(frozen=True)
class VpkHeader:
    """
    文件头 (12 bytes)

    版本 2 的保留字段默认不读取，见 VpkArchive 的 skip_v2_extension 参数。
    """
    SIZE: ClassVar[int] = 12

    signature: int = VPK_SIGNATURE
    version: int = 1
    tree_length: int = 0

    @property
    def data_offset(self) -> int:
        """
        数据区偏移

        版本 1 为 3 个 u32 (12)，版本 2 为 4 个 u32 加 3 个 i32 (28)。
        仅作记录，解析目录树时不使用。
        """
        if self.version == 1:
            return 4 * 3
        if self.version == 2:
            return 4 * 4 + 4 * 3
        raise ValueError(f"未知版本 {self.version} 没有数据区偏移")


# ==================== 文件记录 ====================

@dataclass(frozen=True)
class EntryRecord:
    """
    文件记录元数据 (18 bytes)

    紧跟在文件名之后，preload_bytes > 0 时其后还有预载数据。
    """
    FORMAT: ClassVar[str] = '<IhhIIH'
    SIZE: ClassVar[int] = 18

    crc: int
    preload_bytes: int
    shard_index: int
    payload_offset: int
    payload_length: int
    terminator: int

    @classmethod
    def unpack(cls, data: bytes) -> 'EntryRecord':
        """从字节反序列化 (不检查终止符)"""
        return cls(*struct.unpack(cls.FORMAT, data))

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Core Schema 模块测试

测试文件头和文件记录结构。
"""

import struct

import pytest

from vpkreader.core.schema import (
    VpkHeader,
    EntryRecord,
    VPK_SIGNATURE,
    ENTRY_TERMINATOR,
)


# ==================== VpkHeader 测试 ====================

class TestVpkHeader:
    """VpkHeader 测试"""

    def test_size_constant(self):
        assert VpkHeader.SIZE == 12

    def test_default_values(self):
        header = VpkHeader()
        assert header.signature == VPK_SIGNATURE
        assert header.version == 1
        assert header.tree_length == 0

    @pytest.mark.parametrize("version,offset", [(1, 12), (2, 28)])
    def test_data_offset(self, version, offset):
        """数据区偏移按版本计算"""
        assert VpkHeader(version=version).data_offset == offset

    def test_data_offset_unknown_version(self):
        with pytest.raises(ValueError):
            VpkHeader(version=3).data_offset

    def test_frozen(self):
        """文件头不可修改"""
        header = VpkHeader()
        with pytest.raises(Exception):
            header.version = 2


# ==================== EntryRecord 测试 ====================

class TestEntryRecord:
    """EntryRecord 测试"""

    def test_size_constant(self):
        assert EntryRecord.SIZE == struct.calcsize(EntryRecord.FORMAT) == 18

    def test_unpack(self):
        data = struct.pack('<IhhIIH', 0xDEADBEEF, 5, 7, 100, 50, ENTRY_TERMINATOR)
        record = EntryRecord.unpack(data)

        assert record.crc == 0xDEADBEEF
        assert record.preload_bytes == 5
        assert record.shard_index == 7
        assert record.payload_offset == 100
        assert record.payload_length == 50
        assert record.terminator == 0xFFFF

    def test_unpack_signed_fields(self):
        """preload_bytes 与 shard_index 为有符号值"""
        data = struct.pack('<IhhIIH', 0, -1, 0x7FFF, 0, 0, ENTRY_TERMINATOR)
        record = EntryRecord.unpack(data)
        assert record.preload_bytes == -1
        assert record.shard_index == 0x7FFF

    def test_unpack_invalid_size(self):
        with pytest.raises(struct.error):
            EntryRecord.unpack(b'x' * 10)

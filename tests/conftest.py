#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pytest 全局配置

提供合成目录文件的构造工具、磁盘上的归档 fixtures 和自定义 markers。
"""

import struct
from dataclasses import dataclass
from typing import Dict, Optional

import pytest


VPK_SIGNATURE = 0x55AA1234


# ==================== 自定义 Markers ====================

def pytest_configure(config):
    """注册自定义 markers"""
    config.addinivalue_line("markers", "slow: 耗时较长的测试")


# ==================== 合成目录文件 ====================

@dataclass
class RecordDef:
    """
    待写入的文件记录

    preload_data 为 None 时按 preload_bytes 写入 0 字节的预载数据。
    """
    crc: int = 0
    preload_bytes: int = 0
    shard_index: int = 0
    payload_offset: int = 0
    payload_length: int = 0
    terminator: int = 0xFFFF
    preload_data: Optional[bytes] = None


# {扩展名: {路径: {文件名: RecordDef}}}
TreeDef = Dict[str, Dict[str, Dict[str, RecordDef]]]


def _cstring(name: str) -> bytes:
    return name.encode('latin-1') + b'\x00'


def build_tree(tree: TreeDef) -> bytes:
    """按格式编码三级目录树"""
    out = bytearray()
    for extension, paths in tree.items():
        out += _cstring(extension)
        for path, files in paths.items():
            out += _cstring(path)
            for filename, rec in files.items():
                out += _cstring(filename)
                out += struct.pack(
                    '<IhhIIH',
                    rec.crc,
                    rec.preload_bytes,
                    rec.shard_index,
                    rec.payload_offset,
                    rec.payload_length,
                    rec.terminator,
                )
                if rec.preload_bytes > 0:
                    out += rec.preload_data or b'\x00' * rec.preload_bytes
            out += b'\x00'
        out += b'\x00'
    out += b'\x00'
    return bytes(out)


def build_vpk(
    tree: TreeDef,
    version: int = 1,
    signature: int = VPK_SIGNATURE,
    tree_length: Optional[int] = None,
    v2_extension: bytes = b''
) -> bytes:
    """
    构造完整的目录文件

    Args:
        tree: 目录树描述
        version: 写入的版本号
        signature: 写入的签名
        tree_length: 写入的目录树长度，默认为实际长度
        v2_extension: 紧跟文件头写入的额外字节 (模拟版本 2 保留字段)
    """
    body = build_tree(tree)
    if tree_length is None:
        tree_length = len(body)
    return struct.pack('<III', signature, version, tree_length) + v2_extension + body


@pytest.fixture
def vpk_builder():
    """返回 build_vpk 函数"""
    return build_vpk


@pytest.fixture
def record_def():
    """返回 RecordDef 类"""
    return RecordDef


# ==================== 磁盘归档 Fixtures ====================

SHARD_000 = b"HEADER--" + b"Hello, shard zero!" + b"TRAILING DATA"
SHARD_007 = bytes(range(256)) * 2


@pytest.fixture
def sample_tree() -> TreeDef:
    """
    覆盖预载、分片、零长度三种条目的目录树
    """
    return {
        "png": {
            "resource/flash3/images/spellicons": {
                "icon": RecordDef(crc=0x1234, shard_index=7,
                                  payload_offset=100, payload_length=50),
                "other": RecordDef(crc=0x5678, preload_bytes=5,
                                   preload_data=b"PNG!!"),
            },
        },
        "txt": {
            "docs": {
                "hello": RecordDef(crc=1, shard_index=0,
                                   payload_offset=8, payload_length=18),
                "empty": RecordDef(crc=2, shard_index=0,
                                   payload_offset=0, payload_length=0),
            },
            " ": {
                "readme": RecordDef(crc=3, preload_bytes=3, preload_data=b"abc"),
            },
        },
    }


@pytest.fixture
def archive_files(tmp_path, sample_tree) -> tuple:
    """
    在磁盘上写入目录文件及分片文件

    Returns:
        (目录文件路径, 目录树描述)
    """
    dir_path = tmp_path / "pak01_dir.vpk"
    dir_path.write_bytes(build_vpk(sample_tree))
    (tmp_path / "pak01_000.vpk").write_bytes(SHARD_000)
    (tmp_path / "pak01_007.vpk").write_bytes(SHARD_007)
    return dir_path, sample_tree


@pytest.fixture
def archive(archive_files):
    """已打开的 VpkArchive"""
    from vpkreader import VpkArchive

    dir_path, _ = archive_files
    with VpkArchive(str(dir_path)) as vpk:
        yield vpk

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
vpkreader 异常定义

所有异常均继承自 VpkError，便于统一捕获。
文件缺失、权限不足等 I/O 问题直接以内置 OSError 抛出，不做包装。
"""

from typing import List, Optional


class VpkError(Exception):
    """vpkreader 基础异常"""
    pass


class FormatError(VpkError):
    """
    目录文件格式错误

    签名、版本、条目终止符或数据长度不符合格式时抛出。
    任何 FormatError 都会中止整个加载过程。
    """
    def __init__(self, message: str, expected: Optional[str] = None,
                 actual: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        if expected and actual:
            message = f"{message}: 期望 {expected}, 实际 {actual}"
        super().__init__(message)


class InvalidSignatureError(FormatError):
    """签名 (魔法数) 不匹配"""
    def __init__(self, signature: int, expected_signature: int):
        self.signature = signature
        super().__init__(
            "bad signature",
            expected=f"{expected_signature:#010x}",
            actual=f"{signature:#010x}"
        )


class UnsupportedVersionError(FormatError):
    """
    不支持的格式版本

    只识别版本 1 和 2。
    """
    def __init__(self, file_version: int, supported_versions: List[int]):
        self.file_version = file_version
        self.supported_versions = supported_versions
        super().__init__(
            f"unsupported version {file_version}, "
            f"支持的版本: {supported_versions}"
        )


class MissingTerminatorError(FormatError):
    """
    条目终止符错误

    每条文件记录的元数据必须以 0xFFFF 结尾，否则视为数据损坏。
    """
    def __init__(self, entry_name: str, terminator: int, expected: int):
        self.entry_name = entry_name
        self.terminator = terminator
        super().__init__(
            f"missing entry terminator (条目 '{entry_name}')",
            expected=f"{expected:#06x}",
            actual=f"{terminator:#06x}"
        )


class TruncatedDataError(FormatError):
    """数据流在必需的读取过程中提前结束"""
    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"数据被截断: 期望读取 {requested} 字节，实际只有 {available} 字节"
        )


class NameDecodeError(FormatError):
    """名称字节无法按指定编码解码"""
    def __init__(self, raw: bytes, encoding: str):
        self.raw = raw
        self.encoding = encoding
        super().__init__(
            "名称解码失败",
            expected=encoding,
            actual=raw.hex()
        )


class UnsupportedEntryError(VpkError):
    """
    条目同时声明了预载数据和外部数据

    格式没有定义两种来源如何合并，只影响当前这一次读取，
    不会使目录树或其它条目失效。
    """
    def __init__(self, entry_name: str, preload_bytes: int, payload_length: int):
        self.entry_name = entry_name
        self.preload_bytes = preload_bytes
        self.payload_length = payload_length
        super().__init__(
            f"无法读取条目 '{entry_name}': 同时指定了 "
            f"preload_bytes={preload_bytes} 和 payload_length={payload_length}"
        )


class ShardPathError(VpkError):
    """归档文件名中不含目录标记，无法推导分片文件路径"""
    def __init__(self, file_path: str, marker: str):
        self.file_path = file_path
        self.marker = marker
        super().__init__(
            f"文件名 '{file_path}' 中没有 '{marker}' 标记，无法推导分片路径"
        )


class UnsafePathError(VpkError):
    """条目的逻辑路径解析后落在输出目录之外"""
    def __init__(self, entry_path: str, output_dir: str):
        self.entry_path = entry_path
        self.output_dir = output_dir
        super().__init__(
            f"条目 '{entry_path}' 的路径超出输出目录 '{output_dir}'"
        )


class ArchiveNotLoadedError(VpkError):
    """
    归档未加载

    尚未调用 open()，或上一次加载失败后归档已不可用。
    """
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "归档未加载，请先调用 open()")

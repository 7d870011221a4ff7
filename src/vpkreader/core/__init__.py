#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
vpkreader 核心模块

提供二进制读取、格式结构、目录树模型和解析函数。
"""

from .binary_io import BinaryReader
from .schema import (
    VpkHeader, EntryRecord,
    VPK_SIGNATURE, ENTRY_TERMINATOR, DEFAULT_ENCODING, DIR_MARKER,
)
from .tree import DirectoryTree, ExtensionGroup, PathGroup, FileEntry
from .parser import parse_header, parse_tree, read_name_list, load_directory
from .batch import ErrorPolicy, ProgressInfo, BatchResult, ProgressTracker

__all__ = [
    "BinaryReader",
    "VpkHeader",
    "EntryRecord",
    "VPK_SIGNATURE",
    "ENTRY_TERMINATOR",
    "DEFAULT_ENCODING",
    "DIR_MARKER",
    "DirectoryTree",
    "ExtensionGroup",
    "PathGroup",
    "FileEntry",
    "parse_header",
    "parse_tree",
    "read_name_list",
    "load_directory",
    # 批量操作
    "ErrorPolicy",
    "ProgressInfo",
    "BatchResult",
    "ProgressTracker",
]

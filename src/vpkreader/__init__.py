#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
vpkreader - Valve VPK 目录归档读取库

解析 *_dir.vpk 目录文件，按逻辑路径定位预载数据或分片文件中的数据。
"""

__version__ = "0.1.0"

# 异常类
from .exceptions import (
    VpkError,
    FormatError,
    InvalidSignatureError,
    UnsupportedVersionError,
    MissingTerminatorError,
    TruncatedDataError,
    NameDecodeError,
    UnsupportedEntryError,
    ShardPathError,
    UnsafePathError,
    ArchiveNotLoadedError,
)

# 目录树与解析
from .core import (
    VpkHeader,
    DirectoryTree,
    ExtensionGroup,
    PathGroup,
    FileEntry,
    load_directory,
)

# 工具函数
from .utils import split_logical_name, shard_path_for

# 归档
from .archive import VpkArchive, BoundedStream

__all__ = [
    # 版本
    "__version__",
    # 异常
    "VpkError",
    "FormatError",
    "InvalidSignatureError",
    "UnsupportedVersionError",
    "MissingTerminatorError",
    "TruncatedDataError",
    "NameDecodeError",
    "UnsupportedEntryError",
    "ShardPathError",
    "UnsafePathError",
    "ArchiveNotLoadedError",
    # 目录树
    "VpkHeader",
    "DirectoryTree",
    "ExtensionGroup",
    "PathGroup",
    "FileEntry",
    "load_directory",
    # 工具
    "split_logical_name",
    "shard_path_for",
    # 归档
    "VpkArchive",
    "BoundedStream",
]

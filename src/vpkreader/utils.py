#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
vpkreader 工具函数

提供逻辑路径拆分和分片文件路径推导。
"""

import os
from typing import Optional, Tuple

from .core.schema import DIR_MARKER
from .exceptions import ShardPathError


def split_logical_name(name: str) -> Optional[Tuple[str, str, str]]:
    """
    拆分逻辑路径为 (扩展名, 目录, 文件名)

    以最后一个 '.' 和最后一个 '/' 为分界，任一缺失时返回 None。
    不做路径规范化。

    Args:
        name: 逻辑路径

    Returns:
        (扩展名, 目录路径, 文件名) 元组，无法拆分时返回 None

    Examples:
        >>> split_logical_name("resource/flash3/images/spellicons/icon.png")
        ('png', 'resource/flash3/images/spellicons', 'icon')
        >>> split_logical_name("noseparators") is None
        True
    """
    dot_pos = name.rfind('.')
    slash_pos = name.rfind('/')
    if dot_pos == -1 or slash_pos == -1:
        return None

    extension = name[dot_pos + 1:]
    path = name[:slash_pos]
    filename = name[slash_pos + 1:dot_pos]
    return extension, path, filename


def shard_path_for(file_path: str, shard_index: int, marker: str = DIR_MARKER) -> str:
    """
    由目录文件路径推导分片文件路径

    将文件名中最后一个目录标记替换为 '_' 加 3 位补零的分片序号，
    只处理文件名部分，目录部分保持不变。负的序号按原样格式化 (如 '_-01')。

    Args:
        file_path: 目录文件路径
        shard_index: 分片序号
        marker: 目录标记

    Returns:
        分片文件路径

    Raises:
        ShardPathError: 文件名中没有目录标记

    Examples:
        >>> shard_path_for("dota/pak01_dir.vpk", 7)
        'dota/pak01_007.vpk'
        >>> shard_path_for("pak01_dir.vpk", 123)
        'pak01_123.vpk'
        >>> shard_path_for("pak01_dir.vpk", -1)
        'pak01_-01.vpk'
    """
    directory, basename = os.path.split(file_path)
    head, found, tail = basename.rpartition(marker)
    if not found:
        raise ShardPathError(file_path, marker)
    shard_name = f"{head}_{shard_index:03d}{tail}"
    return os.path.join(directory, shard_name) if directory else shard_name

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
目录树模型

三级结构: ExtensionGroup → PathGroup → FileEntry。
节点只向下持有子节点；向上的关系用整数句柄 (在父级中的位置) 表示，
由 DirectoryTree 负责解析。整棵树构建后不可变。
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple


# 路径组名称为这些值时表示扩展名根目录
ROOT_PATHS = ('', ' ')


@dataclass(frozen=True)
class FileEntry:
    """
    文件条目 (叶子节点)

    Attributes:
        name: 不含扩展名的文件名
        crc: CRC32 校验值 (不做校验)
        preload_bytes: 预载字节数 (有符号)
        shard_index: 分片文件序号 (有符号)
        payload_offset: 数据在分片文件中的偏移
        payload_length: 数据在分片文件中的长度
        preload_data: 预载数据，仅 preload_bytes > 0 时存在
        extension_index: 所属 ExtensionGroup 的句柄
        path_index: 所属 PathGroup 的句柄
    """
    name: str
    crc: int
    preload_bytes: int
    shard_index: int
    payload_offset: int
    payload_length: int
    preload_data: Optional[bytes] = field(default=None, repr=False)
    extension_index: int = 0
    path_index: int = 0

    @property
    def is_preloaded(self) -> bool:
        """内容完全位于预载缓冲区"""
        return self.payload_length == 0 and self.preload_bytes > 0

    @property
    def is_mixed(self) -> bool:
        """同时声明预载与外部数据 (不支持)"""
        return not self.is_preloaded and self.preload_bytes != 0

    @property
    def size(self) -> int:
        """内容的字节数"""
        if self.is_preloaded:
            return self.preload_bytes
        return self.payload_length


@dataclass(frozen=True)
class PathGroup:
    """目录路径分组，path 为空或单个空格时表示扩展名根目录"""
    name: str
    extension_index: int
    index: int
    files: Tuple[FileEntry, ...] = ()

    def find(self, filename: str) -> Optional[FileEntry]:
        for entry in self.files:
            if entry.name == filename:
                return entry
        return None


@dataclass(frozen=True)
class ExtensionGroup:
    """扩展名分组 (如 "png")"""
    name: str
    index: int
    paths: Tuple[PathGroup, ...] = ()

    def find(self, path: str) -> Optional[PathGroup]:
        for group in self.paths:
            if group.name == path:
                return group
        return None


class DirectoryTree:
    """
    目录树

    持有全部 ExtensionGroup，并负责句柄到父节点的解析。
    所有查找都是线性扫描，按解析顺序返回第一个匹配项。
    """

    def __init__(self, extensions: Tuple[ExtensionGroup, ...] = ()):
        self._extensions = tuple(extensions)
        self._file_count = sum(
            len(group.files) for ext in self._extensions for group in ext.paths
        )

    @property
    def extensions(self) -> Tuple[ExtensionGroup, ...]:
        return self._extensions

    def __len__(self) -> int:
        """返回文件条目数量"""
        return self._file_count

    def __iter__(self) -> Iterator[FileEntry]:
        """按解析顺序迭代所有文件条目"""
        for ext in self._extensions:
            for group in ext.paths:
                yield from group.files

    # ==================== 查找 ====================

    def find_extension(self, extension: str) -> Optional[ExtensionGroup]:
        for ext in self._extensions:
            if ext.name == extension:
                return ext
        return None

    def find(self, extension: str, path: str, filename: str) -> Optional[FileEntry]:
        """
        按三级名称查找文件条目

        Args:
            extension: 扩展名 (不含点号)
            path: 目录路径
            filename: 不含扩展名的文件名

        Returns:
            FileEntry，任一级未命中时返回 None
        """
        ext = self.find_extension(extension)
        if ext is None:
            return None
        group = ext.find(path)
        if group is None:
            return None
        return group.find(filename)

    # ==================== 父节点导航 ====================

    def extension_of(self, node) -> ExtensionGroup:
        """返回 PathGroup 或 FileEntry 所属的 ExtensionGroup"""
        return self._extensions[node.extension_index]

    def path_group_of(self, entry: FileEntry) -> PathGroup:
        """返回 FileEntry 所属的 PathGroup"""
        return self._extensions[entry.extension_index].paths[entry.path_index]

    def full_path(self, entry: FileEntry) -> str:
        """
        重建条目的逻辑路径

        Examples:
            >>> tree.full_path(entry)  # doctest: +SKIP
            'resource/flash3/images/spellicons/icon.png'
        """
        path = self.path_group_of(entry).name
        extension = self.extension_of(entry).name
        if path in ROOT_PATHS:
            return f"{entry.name}.{extension}"
        return f"{path}/{entry.name}.{extension}"
